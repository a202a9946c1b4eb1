"""Entry point for 'python -m authbase' command.

This module allows the authbase CLI to be invoked using
'python -m authbase'.
"""

from authbase.cli import main

if __name__ == "__main__":
    main()
