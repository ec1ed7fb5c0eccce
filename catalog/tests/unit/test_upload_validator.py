import pytest
from django.core.files.uploadedfile import SimpleUploadedFile

from catalog.domain.services import StagedFile, UploadValidationError, UploadValidator


def make_upload(name="photo.jpg", content_type="image/jpeg", payload=b"\xff\xd8\xff fake jpeg"):
    return SimpleUploadedFile(name, payload, content_type=content_type)


@pytest.fixture
def validator():
    return UploadValidator()


@pytest.mark.unit
class TestUploadValidator:
    def test_accepts_single_jpeg(self, validator):
        staged = validator.validate([make_upload()])

        assert len(staged) == 1
        assert isinstance(staged[0], StagedFile)
        assert staged[0].extension == ".jpg"
        assert staged[0].content_type == "image/jpeg"

    def test_preserves_submission_order(self, validator):
        uploads = [
            make_upload("front.png", "image/png"),
            make_upload("detail.webp", "image/webp"),
            make_upload("back.jpeg", "image/jpeg"),
        ]

        staged = validator.validate(uploads)

        assert [item.original_filename for item in staged] == ["front.png", "detail.webp", "back.jpeg"]

    def test_extension_is_case_insensitive(self, validator):
        staged = validator.validate([make_upload("PHOTO.JPG", "image/jpeg")])

        assert staged[0].extension == ".jpg"

    def test_accepts_image_jpg_alias(self, validator):
        staged = validator.validate([make_upload("photo.jpeg", "image/jpg")])

        assert staged[0].content_type == "image/jpg"

    @pytest.mark.parametrize("files", [None, []])
    def test_rejects_no_files(self, validator, files):
        with pytest.raises(UploadValidationError) as exc_info:
            validator.validate(files)

        assert exc_info.value.errors == {"images": ["At least 1 image file is required"]}

    def test_rejects_six_files(self, validator):
        uploads = [make_upload(f"photo{i}.jpg") for i in range(6)]

        with pytest.raises(UploadValidationError) as exc_info:
            validator.validate(uploads)

        assert exc_info.value.errors == {"images": ["Maximum 5 files allowed, received 6"]}

    def test_accepts_five_files(self, validator):
        uploads = [make_upload(f"photo{i}.jpg") for i in range(5)]

        assert len(validator.validate(uploads)) == 5

    def test_rejects_oversized_file(self):
        validator = UploadValidator(policy={"MAX_FILE_SIZE": 10})

        with pytest.raises(UploadValidationError) as exc_info:
            validator.validate([make_upload("big.jpg", payload=b"x" * 11)])

        assert exc_info.value.errors["images"] == ["File big.jpg exceeds maximum size of 0.0MB"]

    def test_file_at_size_limit_is_accepted(self):
        validator = UploadValidator(policy={"MAX_FILE_SIZE": 10})

        staged = validator.validate([make_upload("edge.jpg", payload=b"x" * 10)])

        assert staged[0].size == 10

    def test_default_size_message_names_limit(self, validator):
        upload = make_upload("huge.jpg")
        upload.size = 5 * 1024 * 1024 + 1

        with pytest.raises(UploadValidationError) as exc_info:
            validator.validate([upload])

        assert exc_info.value.errors["images"] == ["File huge.jpg exceeds maximum size of 5MB"]

    def test_rejects_disallowed_type(self, validator):
        with pytest.raises(UploadValidationError) as exc_info:
            validator.validate([make_upload("anim.gif", "image/gif")])

        assert exc_info.value.errors["images"] == [
            "File anim.gif has invalid type. Only JPEG, PNG, and WebP are allowed"
        ]

    def test_rejects_extension_mime_mismatch(self, validator):
        with pytest.raises(UploadValidationError) as exc_info:
            validator.validate([make_upload("photo.png", "image/jpeg")])

        assert exc_info.value.errors["images"] == ["File photo.png has mismatched extension and mime type"]

    def test_rejects_missing_extension(self, validator):
        with pytest.raises(UploadValidationError) as exc_info:
            validator.validate([make_upload("photo", "image/jpeg")])

        assert "mismatched extension" in exc_info.value.errors["images"][0]

    def test_collects_every_file_error(self, validator):
        uploads = [
            make_upload("ok.jpg"),
            make_upload("wrong.png", "image/webp"),
            make_upload("doc.pdf", "application/pdf"),
        ]

        with pytest.raises(UploadValidationError) as exc_info:
            validator.validate(uploads)

        messages = exc_info.value.errors["images"]
        assert len(messages) == 2
        assert messages[0].startswith("File wrong.png")
        assert messages[1].startswith("File doc.pdf")

    def test_policy_override(self):
        validator = UploadValidator(policy={"MAX_FILES": 2})

        with pytest.raises(UploadValidationError) as exc_info:
            validator.validate([make_upload(), make_upload(), make_upload()])

        assert exc_info.value.errors["images"] == ["Maximum 2 files allowed, received 3"]

    def test_staged_chunks_rewind_upload(self, validator):
        upload = make_upload(payload=b"abcdef")
        upload.read()

        staged = validator.validate([upload])

        assert b"".join(staged[0].chunks()) == b"abcdef"
