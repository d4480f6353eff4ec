"""
Run with: python -m geocanvas
"""
from geocanvas.main import main

if __name__ == "__main__":
    main()
