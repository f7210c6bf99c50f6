"""Tests for reading multipart file parts on the public form."""

import io

import pytest
from starlette.datastructures import Headers, UploadFile

from src.painel.api.v1.public import read_upload
from src.painel.services.personalization_service import SubmissionError, check_file_size

pytestmark = pytest.mark.unit

MB = 1024 * 1024


class UnreadableFile(io.BytesIO):
    def read(self, *args: object) -> bytes:
        raise AssertionError("file content was read")


async def test_oversized_part_is_refused_unread():
    upload = UploadFile(UnreadableFile(), size=10 * MB + 1, filename="video.mp4")

    with pytest.raises(SubmissionError) as exc_info:
        await read_upload(upload, "midia", 10)

    assert exc_info.value.message == (
        "O arquivo de mídia video.mp4 excede o tamanho máximo permitido (10MB)"
    )


async def test_part_within_limit_is_read():
    upload = UploadFile(
        io.BytesIO(b"\x89PNG"),
        size=4,
        filename="logo.png",
        headers=Headers({"content-type": "image/png"}),
    )

    pending = await read_upload(upload, "logo", 10)

    assert pending.filename == "logo.png"
    assert pending.content == b"\x89PNG"
    assert pending.content_type == "image/png"


class TestCheckFileSize:
    def test_exact_limit_accepted(self):
        check_file_size("depoimento", "a.png", 10 * MB, 10)

    def test_logo_message_has_no_file_name(self):
        with pytest.raises(SubmissionError, match="^O arquivo de logo excede"):
            check_file_size("logo", "logo.png", 10 * MB + 1, 10)

    def test_testimonial_message_names_the_file(self):
        with pytest.raises(SubmissionError, match="depoimento cliente.png excede"):
            check_file_size("depoimento", "cliente.png", 10 * MB + 1, 10)
