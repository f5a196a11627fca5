"""Test configuration for pytest.

Ensure the repository root is on sys.path so tests can import the `cache3c`
package without installing it or setting PYTHONPATH.
"""
import os
import sys

# Compute project root: two directories above this file (cache3c/tests -> cache3c -> project root)
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), '..', '..'))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)
