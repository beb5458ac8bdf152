"""Allows `python -m quadricexplorer`."""
from quadricexplorer.main import main

if __name__ == "__main__":
    main()
