import sys
import os

# Add the project root directory to the Python path
# so pytest can import brew_provisioner without an install.
PROJECT_ROOT = os.path.abspath(os.path.dirname(__file__))
sys.path.insert(0, PROJECT_ROOT)
