import sys

# Import the main module
from DirSearch.main import main

if __name__ == "__main__":
    sys.exit(main())
