# src/apisources/__main__.py
"""Allow `python -m apisources` to run the example walkthrough."""

from apisources.app import main

main()
