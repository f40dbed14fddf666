"""
Tests for package-level metadata.
"""

import exam_toolkit


class TestPackageMetadata:
    """Tests for the top-level package attributes."""

    def test_version_when_imported_then_non_empty(self):
        """A version string is always available."""
        assert isinstance(exam_toolkit.__version__, str)
        assert exam_toolkit.__version__

    def test_copyright_when_imported_then_names_license(self):
        """The copyright line carries the license."""
        assert exam_toolkit.__copyright__.startswith("Copyright")
        assert "MIT License" in exam_toolkit.__copyright__
