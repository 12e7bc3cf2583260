# Main.py
""""" Entry point for the exact rational calculator.

   Responsibilities:
   - Verify required package files exist when run from a checkout
   - Hand the command line over to the console front end

"""""
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parent


def check_files_exist():

    """
      Fail fast if required files are missing / moved / renamed,
      instead of a vague ImportError further down.
    """

    package_dir = PROJECT_ROOT / "rational_calc"

    REQUIRED = [
        package_dir / "Console.py",
        package_dir / "MathEngine.py",
        package_dir / "Parser.py",
        package_dir / "Tokenizer.py",
        package_dir / "config_manager.py",
        package_dir / "error.py",
        package_dir / "config.json",
    ]

    missing_files = []
    for file_path in REQUIRED:
        if not file_path.exists():
            missing_files.append(file_path.name)

    if missing_files:
        print("Error: The following files are missing or in the wrong location:")
        for file_name in missing_files:
            print(f"- {file_name}")
        sys.exit(1)


def main():
    # Keep this thin: no business logic here.
    from rational_calc import Console
    return Console.main()


if __name__ == "__main__":
    check_files_exist()
    sys.exit(main())
