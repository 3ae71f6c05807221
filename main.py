import sys
import os

# Put the project root on the path so 'import brew_provisioner' works
# when main.py is executed directly from a checkout.
project_root = os.path.dirname(os.path.abspath(__file__))
if project_root not in sys.path:
    sys.path.insert(0, project_root)

from brew_provisioner.launcher import main

if __name__ == "__main__":
    sys.exit(main())
