"""
Entry Point Script (Bootstrap)
==============================
This script is a convenient starting point for development runs.

Why is this file needed?
------------------------
1. It is located outside the 'src' package to act as a convenient runner.
2. It modifies 'sys.path' to ensure Python can resolve imports like
   'from phonontransport.model...' without installing the package.

Usage:
    $ python run.py --nx 4 --steps 200 --output results.h5
"""
import sys
import os

# Add the 'src' directory to the Python path
current_dir: str = os.path.dirname(os.path.abspath(__file__))
src_path: str = os.path.join(current_dir, 'src')
sys.path.insert(0, src_path)

from phonontransport.main import main

if __name__ == "__main__":
    main()
