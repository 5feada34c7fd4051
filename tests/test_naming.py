"""
Unit tests for snapmac profile naming
"""

import unittest
import os
import sys

# Add snapmac to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from snapmac.naming import (
    SNAP_PROFILE_PREFIX, AppIdentity, security_tag, hook_security_tag,
    snap_profile_prefix
)

class TestSecurityTag(unittest.TestCase):
    """Test derivation of profile names"""

    def test_security_tag(self):
        """Test app profile name"""
        self.assertEqual(security_tag("SNAP", "APP"), "snap.SNAP.APP")
        self.assertEqual(security_tag("pi2-piglow", "background"), "snap.pi2-piglow.background")

    def test_inputs_not_sanitized(self):
        """Test names are used as given"""
        self.assertEqual(security_tag("a.b", "c d"), "snap.a.b.c d")

    def test_hook_security_tag(self):
        """Test hook profile name"""
        self.assertEqual(hook_security_tag("foo", "configure"), "snap.foo.hook.configure")

    def test_snap_profile_prefix(self):
        """Test per-snap prefix matches every app tag of the snap"""
        prefix = snap_profile_prefix("foo")
        self.assertEqual(prefix, "snap.foo.")
        self.assertTrue(security_tag("foo", "bar").startswith(prefix))
        self.assertFalse(security_tag("foobar", "baz").startswith(prefix))
        self.assertTrue(prefix.startswith(SNAP_PROFILE_PREFIX))

    def test_app_identity(self):
        """Test identity value type"""
        app = AppIdentity("SNAP", "APP")
        self.assertEqual(app.security_tag, "snap.SNAP.APP")
        self.assertEqual(app, AppIdentity(snap_name="SNAP", app_name="APP"))

if __name__ == '__main__':
    unittest.main()
