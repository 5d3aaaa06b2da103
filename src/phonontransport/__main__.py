"""Command-line interface."""
from phonontransport.main import main

if __name__ == "__main__":
    main()
