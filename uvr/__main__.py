"""
The primary entry point to the application.
"""

from uvr.cli import run

if __name__ == '__main__':
    run()
