"""
snapmac Test Suite

Covers profile naming, the apparmor_parser loader (driven through a fake
command runner, so no helper is ever spawned), parsing and filtering of the
kernel profile listing (read from temporary files standing in for
securityfs), configuration loading and the snapmac command-line tool.
"""

import sys
import os
import unittest
import logging

# Add snapmac to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

# Configure logging for tests
logging.basicConfig(
    level=logging.DEBUG,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)

def run_all_tests():
    """Run every test module in this directory"""
    loader = unittest.TestLoader()
    suite = loader.discover(os.path.dirname(os.path.abspath(__file__)), pattern='test_*.py')
    runner = unittest.TextTestRunner(verbosity=2)
    return runner.run(suite)

if __name__ == '__main__':
    run_all_tests()
