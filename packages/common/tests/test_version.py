"""Test common package basics."""

import mixor_common


def test_version():
    """Test that version is defined."""
    assert hasattr(mixor_common, "__version__")
    assert isinstance(mixor_common.__version__, str)
    assert mixor_common.__version__ == "1.0.0"
