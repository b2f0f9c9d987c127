"""Entry point for 'python -m recordbase' command."""

from recordbase.cli import main

if __name__ == "__main__":
    main()
