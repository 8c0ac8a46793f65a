"""Command-line interface."""
from boundarylesson.main import main

if __name__ == "__main__":
    main()
