import pytest

from resizeio import paths
from resizeio.extensions import MIME_EXTENSIONS, extension_for


class TestDerive:
    def test_nested_source(self):
        assert (
            paths.derive("resized/", "images/cat.jpg", "fit", 200, 100)
            == "resized/images/fit/200x100/cat.jpg"
        )

    def test_top_level_source_has_no_dir(self):
        assert paths.derive("resized/", "cat.jpg", "resize", 50, 60) == (
            "resized/resize/50x60/cat.jpg"
        )

    def test_leading_slash_is_dropped(self):
        assert paths.derive("resized/", "/a/b/cat.jpg", "fit", 10, 10) == (
            "resized/a/b/fit/10x10/cat.jpg"
        )
        assert paths.derive("resized/", "/cat.jpg", "fit", 10, 10) == (
            "resized/fit/10x10/cat.jpg"
        )

    def test_absent_dimension_is_empty(self):
        assert paths.derive("resized/", "cat.jpg", "fit", 200, None) == (
            "resized/fit/200x/cat.jpg"
        )
        assert paths.derive("resized/", "cat.jpg", "fit", None, 80) == (
            "resized/fit/x80/cat.jpg"
        )

    def test_root_without_trailing_slash(self):
        assert paths.derive("resized", "cat.jpg", "fit", 1, 2) == "resized/fit/1x2/cat.jpg"
        assert paths.derive("", "cat.jpg", "fit", 1, 2) == "fit/1x2/cat.jpg"

    def test_deterministic(self):
        first = paths.derive("resized/", "images/cat.jpg", "fit", 200, 100)
        second = paths.derive("resized/", "images/cat.jpg", "fit", 200, 100)
        assert first == second


class TestExtensions:
    @pytest.mark.parametrize(
        "path,expected",
        [("a/cat.jpg", "jpg"), ("cat.JPEG", "JPEG"), ("noext", ""), ("a.b/c", "")],
    )
    def test_extension(self, path, expected):
        assert paths.extension(path) == expected

    def test_replace_extension(self):
        assert paths.replace_extension("resized/fit/1x1/cat.png", "jpg") == (
            "resized/fit/1x1/cat.jpg"
        )
        assert paths.replace_extension("resized/fit/1x1/cat", "png") == (
            "resized/fit/1x1/cat.png"
        )


class TestExtensionTable:
    def test_lookup(self):
        assert extension_for("image/jpeg") == "jpeg"
        assert extension_for("IMAGE/PNG; charset=binary") == "png"
        assert extension_for("application/x-unknown") is None

    def test_keys_are_content_types(self):
        assert all("/" in content_type for content_type in MIME_EXTENSIONS)
        assert extension_for("visibility") is None
