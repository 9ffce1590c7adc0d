def join_url(base_url: str, path: str) -> str:
    """Append a storage path to a base url, keeping whatever path the base has"""
    return f"{base_url.rstrip('/')}/{path.lstrip('/')}"


def secure(url: str) -> str:
    if url.startswith("http:"):
        return "https:" + url[len("http:") :]
    return url
