from typing import Optional


def get_image_url(image_path: Optional[str], base_url: str) -> Optional[str]:
    """Turn a stored image path ("/images/jacket.jpeg") into an absolute URL.

    Paths that are already absolute http(s) URLs are returned unchanged.
    """
    if not image_path:
        return None
    if image_path.startswith(("http://", "https://")):
        return image_path

    # Drop one leading slash so the join never produces "//"
    clean_path = image_path[1:] if image_path.startswith("/") else image_path
    return f"{base_url.rstrip('/')}/{clean_path}"
