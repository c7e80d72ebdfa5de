import numpy as np
import pytest

from src.services.image_file_codec.core.addressing import PixelCursor
from src.services.image_file_codec.core.bit_packing import write_bytes
from src.services.image_file_codec.core.codec import decode_payload, encode_payload
from src.services.image_file_codec.core.errors import BoundsError, CapacityError, EncodingError
from src.services.image_file_codec.core.header import build_header
from src.services.image_file_codec.models.codec_models import CodecEvent, FilePayload


def test_end_to_end_small_file(make_pixels):
    pixels = make_pixels(500, 500)
    payload = FilePayload(name="data.txt", data=b"abcdefgh")

    encode_payload(pixels, payload)
    recovered = decode_payload(pixels)

    assert recovered.name == "data.txt"
    assert recovered.data == b"abcdefgh"


@pytest.mark.parametrize(
    "name, data",
    [
        ("", b""),
        ("empty.bin", b""),
        ("résumé – final.pdf", bytes(range(256)) * 3),
        ("日本語.txt", "こんにちは".encode("utf-8")),
    ],
)
def test_round_trip(make_pixels, name, data):
    pixels = make_pixels(60, 60)
    encode_payload(pixels, FilePayload(name=name, data=data))
    assert decode_payload(pixels) == FilePayload(name=name, data=data)


def test_encoding_only_changes_lsbs_of_the_frame(make_pixels):
    pixels = make_pixels(50, 50)
    original = pixels.copy()
    payload = FilePayload(name="a.txt", data=b"x" * 40)

    encode_payload(pixels, payload)

    assert np.array_equal(pixels & 0xFE, original & 0xFE)
    frame_pixels = (25 + 5 + 40) * 2
    flat_new = pixels.reshape(-1, 4)
    flat_old = original.reshape(-1, 4)
    assert np.array_equal(flat_new[frame_pixels:], flat_old[frame_pixels:])


def test_refused_payload_leaves_image_untouched(make_pixels):
    pixels = make_pixels(100, 100)
    original = pixels.copy()

    with pytest.raises(CapacityError):
        encode_payload(pixels, FilePayload(name="big.bin", data=bytes(4496)))

    assert np.array_equal(pixels, original)


def test_payload_just_under_threshold_is_accepted(make_pixels):
    pixels = make_pixels(100, 100)
    payload = FilePayload(name="fits.bin", data=bytes(range(256)) * 17 + bytes(143))
    assert len(payload.data) == 4495

    encode_payload(pixels, payload)
    assert decode_payload(pixels).data == payload.data


def test_image_smaller_than_reserve_is_refused(make_pixels):
    pixels = make_pixels(20, 20)
    with pytest.raises(CapacityError):
        encode_payload(pixels, FilePayload(name="a", data=b"a"))


def test_progress_callback_receives_events_in_order(make_pixels):
    pixels = make_pixels(60, 60)
    events = []

    encode_payload(pixels, FilePayload(name="n", data=b"d"), on_progress=events.append)
    decode_payload(pixels, on_progress=events.append)

    assert events == [
        CodecEvent.ENCODING_STARTED,
        CodecEvent.HEADER_ENCODED,
        CodecEvent.DATA_ENCODED,
        CodecEvent.DECODING_STARTED,
        CodecEvent.HEADER_DECODED,
        CodecEvent.DATA_DECODED,
    ]


def test_invalid_utf8_name_raises_encoding_error(make_pixels):
    pixels = make_pixels(40, 40)
    cursor = PixelCursor()
    write_bytes(pixels, cursor, build_header(2, 1))
    write_bytes(pixels, cursor, b"\xff\xfe!")

    with pytest.raises(EncodingError):
        decode_payload(pixels)


def test_header_declaring_too_much_data_raises_bounds_error(make_pixels):
    pixels = make_pixels(40, 40)
    write_bytes(pixels, PixelCursor(), build_header(0, 2**32 - 1))

    with pytest.raises(BoundsError):
        decode_payload(pixels)


def test_image_too_small_for_header_raises_bounds_error(make_pixels):
    with pytest.raises(BoundsError):
        decode_payload(make_pixels(7, 7))


@pytest.mark.parametrize(
    "pixels",
    [
        np.zeros((10, 10, 3), dtype=np.uint8),
        np.zeros((10, 10, 4), dtype=np.uint16),
        np.zeros((100, 4), dtype=np.uint8),
        [[0, 0, 0, 0]],
    ],
)
def test_rejects_unusable_buffers(pixels):
    with pytest.raises(ValueError):
        decode_payload(pixels)


def test_invalid_name_fails_before_data_is_read(make_pixels, monkeypatch):
    from src.services.image_file_codec.core import codec

    pixels = make_pixels(40, 40)
    cursor = PixelCursor()
    write_bytes(pixels, cursor, build_header(2, 300))
    write_bytes(pixels, cursor, b"\xc3\x28")

    requested = []
    real_read_bytes = codec.read_bytes

    def recording_read_bytes(pixels, cursor, length):
        requested.append(length)
        return real_read_bytes(pixels, cursor, length)

    monkeypatch.setattr(codec, "read_bytes", recording_read_bytes)

    with pytest.raises(EncodingError):
        decode_payload(pixels)
    assert requested == [2]
