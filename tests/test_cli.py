import numpy as np
from PIL import Image

from src.services.image_file_codec import cli


def test_encode_then_decode(tmp_path, make_pixels, capsys, monkeypatch):
    cover = tmp_path / "cover.png"
    Image.fromarray(make_pixels(80, 80)).save(cover)
    secret = tmp_path / "data.txt"
    secret.write_bytes(b"abcdefgh")
    stego = tmp_path / "stego.png"

    assert cli.main(["encode", "-i", str(cover), "-f", str(secret), "-o", str(stego)]) == 0
    out = capsys.readouterr().out
    assert "Space used in image: 0.3% Data Size: 0.0MB" in out
    assert "Encoded Header" in out
    assert "Encoded Data" in out

    monkeypatch.chdir(tmp_path)
    secret.unlink()
    assert cli.main(["decode", "-i", str(stego)]) == 0
    assert secret.read_bytes() == b"abcdefgh"
    assert "Decoded Data" in capsys.readouterr().out


def test_decode_to_explicit_output(tmp_path, make_pixels):
    cover = tmp_path / "cover.png"
    Image.fromarray(make_pixels(80, 80)).save(cover)
    secret = tmp_path / "in.bin"
    secret.write_bytes(bytes(range(100)))
    stego = tmp_path / "stego_out.png"

    assert cli.main(["encode", "--image", str(cover), "--file", str(secret), "--output", str(stego)]) == 0
    out = tmp_path / "nested" / "out.bin"
    assert cli.main(["decode", "--image", str(stego), "--output", str(out)]) == 0
    assert out.read_bytes() == bytes(range(100))


def test_encode_refuses_oversized_file(tmp_path, make_pixels, capsys):
    cover = tmp_path / "cover.png"
    pixels = make_pixels(40, 40)
    Image.fromarray(pixels).save(cover)
    secret = tmp_path / "big.bin"
    secret.write_bytes(bytes(1000))
    stego = tmp_path / "stego.png"

    assert cli.main(["encode", "-i", str(cover), "-f", str(secret), "-o", str(stego)]) == 1
    assert "Image is too small to fit the data" in capsys.readouterr().err
    assert not stego.exists()
    assert np.array_equal(np.array(Image.open(cover)), pixels)


def test_encode_refuses_lossy_output(tmp_path, make_pixels, capsys):
    cover = tmp_path / "cover.png"
    Image.fromarray(make_pixels(80, 80)).save(cover)
    secret = tmp_path / "s.txt"
    secret.write_bytes(b"s")

    assert cli.main(["encode", "-i", str(cover), "-f", str(secret), "-o", str(tmp_path / "out.jpg")]) == 1
    captured = capsys.readouterr()
    assert "lossy" in captured.err
    assert "Encoding image" not in captured.out
    assert not (tmp_path / "out.jpg").exists()


def test_missing_image_reports_error(tmp_path, capsys):
    assert cli.main(["decode", "-i", str(tmp_path / "nope.png")]) == 1
    assert capsys.readouterr().err.startswith("Error:")
