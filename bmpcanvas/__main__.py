"""Main entry point for running bmpcanvas as a module."""
from .main import main

if __name__ == "__main__":
    main()
