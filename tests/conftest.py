"""
Pytest configuration for regmachine tests.

Registers hypothesis profiles; pick one with HYPOTHESIS_PROFILE
(default: "default").
"""

import os

from hypothesis import settings

settings.register_profile(
    "default",
    print_blob=True,
    deadline=None,
)

# More examples for CI runs
settings.register_profile(
    "ci",
    print_blob=True,
    deadline=None,
    max_examples=500,
)

settings.register_profile(
    "dev",
    max_examples=20,
    deadline=None,
)

settings.load_profile(os.environ.get("HYPOTHESIS_PROFILE", "default"))
