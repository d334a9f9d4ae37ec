# =============================================================================
# tests/test_profile_routes.py - Profile Page and Upload Tests
# =============================================================================

from unittest.mock import patch

from app.exceptions import StoreFailureError
from tests.conftest import PUBLIC_IMAGE_URL

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 32


class TestProfilePage:
    def test_profile_renders_user(self, logged_in_client):
        response = logged_in_client.get("/profile")

        assert response.status_code == 200
        assert "Alice Liddell" in response.text
        assert "No posts yet." in response.text

    def test_profile_never_renders_password_hash(self, logged_in_client, current_user):
        response = logged_in_client.get("/profile")
        assert current_user.password not in response.text

    def test_profile_store_failure(self, logged_in_client, context):
        with patch.object(
            context.users, "get_profile", side_effect=StoreFailureError("get profile", "down")
        ):
            response = logged_in_client.get("/profile")

        assert response.status_code == 500
        assert response.text == "Internal Server Error"
        assert "down" not in response.text

    def test_upload_page(self, logged_in_client):
        response = logged_in_client.get("/profile/upload")

        assert response.status_code == 200
        assert 'enctype="multipart/form-data"' in response.text


class TestUpload:
    def test_upload_sets_profile_image(self, logged_in_client, context, current_user, storage_client):
        response = logged_in_client.post(
            "/upload", files={"dp": ("me.png", PNG_BYTES, "image/png")}
        )

        assert response.status_code == 303
        assert response.headers["location"] == "/profile"

        user = context.users.get_by_id(current_user.id)
        assert user.profile_image.endswith(".png")
        assert user.profile_image != "me.png"

        upload = storage_client.storage.from_.return_value.upload
        assert upload.call_args.kwargs["path"] == user.profile_image
        assert upload.call_args.kwargs["file"] == PNG_BYTES

    def test_profile_shows_uploaded_image(self, logged_in_client, context, current_user):
        logged_in_client.post("/upload", files={"dp": ("me.png", PNG_BYTES, "image/png")})
        filename = context.users.get_by_id(current_user.id).profile_image

        response = logged_in_client.get("/profile")

        assert PUBLIC_IMAGE_URL + filename in response.text

    def test_upload_rejects_file_type(self, logged_in_client, context, current_user):
        response = logged_in_client.post(
            "/upload", files={"dp": ("run.exe", b"MZ", "application/octet-stream")}
        )

        assert response.status_code == 400
        assert context.users.get_by_id(current_user.id).profile_image is None

    def test_upload_rejects_large_file(self, logged_in_client, test_settings):
        too_big = b"\x00" * (test_settings.max_upload_size_bytes + 1)

        response = logged_in_client.post(
            "/upload", files={"dp": ("big.png", too_big, "image/png")}
        )

        assert response.status_code == 413

    def test_upload_without_file(self, logged_in_client):
        response = logged_in_client.post("/upload", data={"note": "no file"})

        assert response.status_code == 400
        assert response.text == "No file uploaded"


class TestProfileImage:
    def test_image_page_with_picture(self, logged_in_client, context, current_user):
        context.users.set_profile_image(current_user.id, "abc123.png")

        response = logged_in_client.get("/profile/image/abc123.png")

        assert response.status_code == 200
        assert PUBLIC_IMAGE_URL + "abc123.png" in response.text

    def test_image_page_without_picture(self, logged_in_client):
        response = logged_in_client.get("/profile/image/none.png")

        assert response.status_code == 200
        assert "No profile picture yet." in response.text
