import PIL.Image
import pytest
from sphere_renders.main import main


def test_cli_renders_png(tmp_path):
    path = tmp_path / "render.png"
    main(["--width", "40", "--height", "30", "--output", str(path)])

    with PIL.Image.open(path) as img:
        assert img.size == (40, 30)
        assert img.mode == "L"


def test_cli_write_failure_exits_nonzero(tmp_path):
    path = tmp_path / "missing" / "render.png"
    with pytest.raises(SystemExit) as excinfo:
        main(["--width", "8", "--height", "8", "--output", str(path)])
    assert excinfo.value.code == 1


def test_cli_rejects_bad_size(tmp_path):
    with pytest.raises(SystemExit) as excinfo:
        main(["--width", "0", "--output", str(tmp_path / "x.png")])
    assert excinfo.value.code == 2
