
# cipdocs/slug.py
import sys, posixpath

# stored under a different ending so the site serves it as-is
RENAMES = {".json": ".txt"}

def is_remote(ref: str) -> bool:
    return "http://" in ref or "https://" in ref

def asset_path(match: str) -> str:
    """`](./img/a.png)` -> `img/a.png`, relative to the CIP folder"""
    path = match[2:] if match.startswith("](") else match
    path = path[:-1] if path.endswith(")") else path
    return posixpath.normpath(path).lstrip("/")

def escapes(path: str) -> bool:
    """True for `..` paths that leave the CIP folder"""
    return path == ".." or path.startswith("../")

def stored_name(path: str) -> str:
    root, ext = posixpath.splitext(path)
    return root + RENAMES.get(ext.lower(), ext)

def static_link(prefix: str, cip: str, path: str) -> str:
    return posixpath.normpath(posixpath.join(prefix, cip, stored_name(path)))

if __name__ == "__main__":
    print(stored_name(asset_path(sys.argv[1])))
