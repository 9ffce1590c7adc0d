from click.testing import CliRunner

from resizeio.cli import cli

from .conftest import make_image, write_file


def invoke(resizer, *args):
    return CliRunner().invoke(cli, list(args), obj={"resizer": lambda: resizer})


class TestCli:
    def test_url(self, resizer, primary_root):
        write_file(primary_root, "images/cat.jpg", make_image(), mtime=1000)
        result = invoke(resizer, "url", "images/cat.jpg", "-w", "200", "-h", "100")
        assert result.exit_code == 0
        assert "http://cdn.test/storage/resized/images/fit/200x100/cat.jpg" in result.output

    def test_url_alias_and_secure(self, resizer, primary_root):
        write_file(primary_root, "images/cat.jpg", make_image(), mtime=1000)
        result = invoke(resizer, "u", "images/cat.jpg", "-w", "200", "--secure")
        assert result.exit_code == 0
        assert "https://cdn.test/storage/resized/images/fit/200x/cat.jpg" in result.output

    def test_path(self, resizer, primary_root):
        write_file(primary_root, "cat.png", make_image("PNG"), mtime=1000)
        result = invoke(resizer, "path", "cat.png", "-a", "resize", "-h", "50")
        assert result.exit_code == 0
        assert "resized/resize/x50/cat.png" in result.output

    def test_missing(self, resizer):
        result = invoke(resizer, "url", "nope.jpg", "-w", "10")
        assert result.exit_code == 1

    def test_bad_action(self, resizer):
        result = invoke(resizer, "url", "cat.jpg", "-w", "10", "-a", "crop")
        assert result.exit_code == 2

    def test_derive(self, resizer):
        result = invoke(resizer, "derive", "a/cat.jpg", "-w", "10", "-h", "20")
        assert result.exit_code == 0
        assert result.output.strip().endswith("a/fit/10x20/cat.jpg")
