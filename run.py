#!/usr/bin/env python3
"""
Run the echo server from a checkout.

Usage:
    python run.py              # FastAPI/uvicorn
    python run.py --stdlib     # stdlib http.server

    # or with venv
    .venv/Scripts/python run.py
"""
import sys
import os

# Add src to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), 'src'))


if __name__ == "__main__":
    from http_echo.cli import main

    use_stdlib = "--stdlib" in sys.argv or "-s" in sys.argv
    sys.exit(main(["serve", "--stdlib"] if use_stdlib else ["serve"]))
