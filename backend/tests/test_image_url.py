from utils.image_url import get_image_url


def test_relative_path_is_joined_without_double_slash():
    assert get_image_url("/images/jacket.jpeg", "http://localhost:4000") == "http://localhost:4000/images/jacket.jpeg"
    assert get_image_url("images/jacket.jpeg", "http://localhost:4000/") == "http://localhost:4000/images/jacket.jpeg"


def test_absolute_urls_pass_through():
    url = "https://cdn.example.com/p/1.png"
    assert get_image_url(url, "http://localhost:4000") == url


def test_empty_path():
    assert get_image_url(None, "http://localhost:4000") is None
    assert get_image_url("", "http://localhost:4000") is None


def test_public_api_url_setting_wins(client, monkeypatch):
    from config import settings

    monkeypatch.setattr(settings, "PUBLIC_API_URL", "https://api.nexus.example")

    product = client.get("/api/products/1").json()

    assert product["imageUrl"] == "https://api.nexus.example/images/jacket.jpeg"
