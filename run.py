"""
Entry Point Script (Bootstrap)
==============================
This script starts the lesson from a source checkout.

Why is this file needed?
------------------------
1. It is located outside the 'src' package to act as a convenient runner.
2. It modifies 'sys.path' so imports like 'from boundarylesson.model...'
   resolve without installing the package.

Usage:
    $ python run.py --seed 42
"""
import os
import sys

current_dir: str = os.path.dirname(os.path.abspath(__file__))
src_path: str = os.path.join(current_dir, 'src')
sys.path.insert(0, src_path)

from boundarylesson.main import main

if __name__ == "__main__":
    main()
