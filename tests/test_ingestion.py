"""Tests for upload ingestion and material downloads."""

import asyncio
import io
import time

import pytest

from eduplatform.classroom import (
    decode_data_url,
    encode_data_url,
    ingest_material,
    ingest_materials,
    ingest_thumbnail,
    ingest_uploads,
    open_material,
)
from eduplatform.errors import IngestionError, PlatformError, ValidationError
from eduplatform.schemas import CourseFields, Material


def named_bytes(name, data):
    upload = io.BytesIO(data)
    upload.name = name
    return upload


class SlowUpload:
    """File-like upload whose read blocks for a while."""

    def __init__(self, name, data, delay, mime_type=None):
        self.name = name
        self.type = mime_type
        self._data = data
        self._delay = delay

    def getvalue(self):
        time.sleep(self._delay)
        return self._data


class TestDataUrls:

    def test_encode(self):
        assert encode_data_url(b"hi", "text/plain") == "data:text/plain;base64,aGk="

    def test_decode_base64(self):
        assert decode_data_url("data:text/plain;base64,aGk=") == ("text/plain", b"hi")

    def test_decode_percent_encoded(self):
        assert decode_data_url("data:,hello%20world") == ("text/plain", b"hello world")

    def test_decode_rejects_garbage(self):
        with pytest.raises(ValidationError):
            decode_data_url("https://example.com/file.pdf")
        with pytest.raises(ValidationError):
            decode_data_url("data:text/plain;base64,@@@")


class TestIngestMaterials:

    def test_path_upload(self, tmp_path):
        path = tmp_path / "syllabus.pdf"
        path.write_bytes(b"%PDF-1.4")
        material = asyncio.run(ingest_material(path))
        assert material.name == "syllabus.pdf"
        assert material.mime_type == "application/pdf"
        assert material.size_bytes == 8
        assert decode_data_url(material.content)[1] == b"%PDF-1.4"

    def test_file_like_upload(self):
        material = asyncio.run(ingest_material(named_bytes("notes.txt", b"abc")))
        assert material.mime_type == "text/plain"
        assert material.size_bytes == 3

    def test_order_follows_input_not_completion(self):
        uploads = [
            SlowUpload("first.txt", b"1", 0.2),
            SlowUpload("second.txt", b"2", 0.0),
            SlowUpload("third.txt", b"3", 0.1),
        ]
        materials = asyncio.run(ingest_materials(uploads))
        assert [m.name for m in materials] == ["first.txt", "second.txt", "third.txt"]
        assert len({m.id for m in materials}) == 3

    def test_empty(self):
        assert asyncio.run(ingest_materials([])) == []

    def test_missing_file_raises(self, tmp_path):
        good = tmp_path / "ok.txt"
        good.write_bytes(b"ok")
        with pytest.raises(IngestionError) as exc:
            asyncio.run(ingest_materials([good, tmp_path / "missing.txt"]))
        assert exc.value.kind == "ingestion"

    def test_failed_ingestion_writes_no_course(self, platform, educator, tmp_path):
        async def submit():
            _, materials = await ingest_uploads(None, [tmp_path / "missing.pdf"])
            return platform.courses.create(
                educator.id, educator.name, CourseFields(title="T", description="D"), materials
            )

        with pytest.raises(IngestionError):
            asyncio.run(submit())
        assert platform.courses.list_all() == []

    def test_upload_without_name(self):
        with pytest.raises(IngestionError):
            asyncio.run(ingest_material(io.BytesIO(b"x")))

    def test_closed_upload_raises(self):
        upload = named_bytes("notes.txt", b"x")
        upload.close()
        with pytest.raises(IngestionError) as exc:
            asyncio.run(ingest_material(upload))
        assert "notes.txt" in exc.value.message


class TestThumbnail:

    def test_image(self):
        url = asyncio.run(ingest_thumbnail(named_bytes("cover.png", b"\x89PNG")))
        assert url.startswith("data:image/png;base64,")

    def test_none(self):
        assert asyncio.run(ingest_thumbnail(None)) is None

    def test_not_an_image(self):
        with pytest.raises(ValidationError):
            asyncio.run(ingest_thumbnail(named_bytes("cover.txt", b"text")))


class TestDownload:

    def test_round_trip_through_course(self, platform, educator):
        thumbnail, materials = asyncio.run(
            ingest_uploads(named_bytes("cover.png", b"\x89PNG"), [named_bytes("deck.pdf", b"%PDF")])
        )
        course = platform.courses.create(
            educator.id,
            educator.name,
            CourseFields(title="T", description="D", thumbnail=thumbnail),
            materials,
        )
        stored = platform.courses.get_by_id(course.id)
        assert stored.thumbnail == thumbnail

        download = open_material(stored.materials[0])
        assert download.filename == "deck.pdf"
        assert download.mime_type == "application/pdf"
        assert download.getvalue() == b"%PDF"

    def test_corrupt_material_raises_platform_error(self):
        broken = Material(
            id="m1", name="deck.pdf", mime_type="application/pdf",
            content="data:application/pdf;base64,@@@", size_bytes=3,
        )
        with pytest.raises(PlatformError) as exc:
            open_material(broken)
        assert exc.value.kind == "validation"
