# Console.py
"""Console front end for the exact rational calculator.

Modes
-----
- REPL (default): read a line, print '= value' / '≈ value' or the error,
  until end of input.
- One-shot (-e EXPR): evaluate a single expression.
- Batch (-f FILE): evaluate every non-blank line of a file, each on its own.

REPL commands
-------------
:quit / :exit         leave the loop
:copy                 copy the last result to the clipboard
:settings             show the current settings
:set <key> <value>    change and save a setting (value is read as JSON)
"""

import argparse
import json
import sys

import pyperclip

from . import MathEngine as MathEngine
from . import config_manager as config_manager
from . import error as E


INDENT = "    "


def format_error(error):
    return f"Error {error.code}: {error.message}"


class ConsoleCalculator:
    """Holds the settings and the last result for one console session."""

    def __init__(self, settings=None):
        if settings is None:
            settings = config_manager.load_setting_value("all")
        self.settings = settings
        self.last_result = None

    # ---- evaluation ----

    def handle_line(self, problem):
        """Evaluate one line and print the result. Returns False on error."""
        try:
            ergebnis = MathEngine.evaluate(problem)
            rendered_value, rounding = MathEngine.cleanup(
                ergebnis,
                decimal_places=self.settings.get("decimal_places", 24),
                fractions=self.settings.get("fractions", False),
            )
        except E.MathError as e:
            print(INDENT + format_error(e))
            return False

        self.last_result = rendered_value
        print(INDENT + MathEngine.display(rendered_value, rounding))

        if self.settings.get("copy_result") == True:
            self.copy_result()
        return True

    def copy_result(self):
        if self.last_result is None:
            print(INDENT + "Nothing to copy.")
            return False
        try:
            pyperclip.copy(self.last_result)
        except pyperclip.PyperclipException as e:
            print(INDENT + f"Clipboard not available: {e}")
            return False
        return True

    # ---- commands ----

    def handle_command(self, line):
        """Run a ':' command. Returns False when the session should end."""
        parts = line[1:].split(maxsplit=2)
        command = parts[0].lower() if parts else ""

        if command in ("quit", "exit"):
            return False

        elif command == "copy":
            if self.copy_result():
                print(INDENT + f"Copied: {self.last_result}")

        elif command == "settings":
            for key, value in self.settings.items():
                print(INDENT + f"{key} = {json.dumps(value)}")

        elif command == "set":
            if len(parts) < 3:
                print(INDENT + "Usage: :set <key> <value>")
            else:
                self.change_setting(parts[1], parts[2])

        else:
            print(INDENT + f"Unknown command: {line}")

        return True

    def change_setting(self, key, raw_value):
        if key not in config_manager.DEFAULT_SETTINGS:
            print(INDENT + format_error(E.ConfigError(E.ERROR_MESSAGES["5002"] + key, code="5002")))
            return False

        try:
            value = json.loads(raw_value)
        except json.JSONDecodeError:
            value = raw_value

        if not config_manager.is_valid_setting(key, value):
            print(INDENT + format_error(E.ConfigError(
                E.ERROR_MESSAGES["5003"] + f"{key} = {raw_value}", code="5003")))
            return False

        self.settings[key] = value
        if key == "debug":
            MathEngine.debug = bool(value)

        saved_settings = config_manager.save_setting(self.settings)
        if not saved_settings:
            print(INDENT + format_error(
                E.ConfigError(E.ERROR_MESSAGES["5001"] + key, code="5001")))
            return False

        print(INDENT + f"{key} = {json.dumps(value)}")
        return True

    # ---- modes ----

    def run(self, stream=None):
        """Interactive loop. Returns the process exit status."""
        if stream is None:
            stream = sys.stdin

        while True:
            print(self.settings.get("prompt", "> "), end="", flush=True)
            line = stream.readline()

            if not line:
                print("\nExiting...")
                return 0

            line = line.strip()
            if not line:
                continue

            if line.startswith(":"):
                if not self.handle_command(line):
                    print("Exiting...")
                    return 0
            else:
                self.handle_line(line)

    def run_once(self, problem):
        try:
            print(MathEngine.calculate(problem, self.settings))
        except E.MathError as e:
            print(format_error(e))
            return 1
        return 0

    def run_batch(self, path):
        """Evaluate every non-blank line of `path`; exit status 1 if any failed."""
        try:
            with open(path, 'r', encoding='utf-8') as f:
                lines = f.read().splitlines()
        except OSError as e:
            print(f"Cannot read {path}: {e}", file=sys.stderr)
            return 1

        failed = False
        for line in lines:
            problem = line.strip()
            if not problem:
                continue
            try:
                print(f"{problem} {MathEngine.calculate(problem, self.settings)}")
            except E.MathError as e:
                print(f"{problem} {format_error(e)}")
                failed = True

        return 1 if failed else 0


def build_arg_parser():
    parser = argparse.ArgumentParser(
        prog="rational-calc",
        description="Evaluate arithmetic expressions exactly, as rational numbers.",
    )
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument("-e", "--expression", help="evaluate EXPRESSION and exit")
    mode.add_argument("-f", "--file", help="evaluate every line of FILE and exit")
    parser.add_argument("--debug", action="store_true",
                        help="print the tokens and the parsed tree")
    return parser


def main(argv=None):
    args = build_arg_parser().parse_args(argv)

    settings = config_manager.load_setting_value("all")
    MathEngine.debug = args.debug or bool(settings.get("debug"))

    console = ConsoleCalculator(settings)
    if args.expression is not None:
        return console.run_once(args.expression)
    if args.file is not None:
        return console.run_batch(args.file)
    return console.run()


if __name__ == "__main__":
    sys.exit(main())
