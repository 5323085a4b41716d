import os
import json


def ensure_dir_exists(path: str) -> None:
    d = os.path.dirname(path)
    if d and not os.path.exists(d):
        os.makedirs(d, exist_ok=True)


def atomic_write_bytes(path: str, data: bytes) -> None:
    """
    Atomically write bytes to 'path' by writing to a temp file and renaming.
    """
    ensure_dir_exists(path)
    tmp = path + ".tmp"
    with open(tmp, "wb") as f:
        f.write(data)
        f.flush()
        os.fsync(f.fileno())
    os.replace(tmp, path)


def atomic_read_bytes(path: str) -> bytes:
    with open(path, "rb") as f:
        return f.read()


def default_config_path() -> str:
    """
    %APPDATA%/PassGen on Windows; ~/.passgen elsewhere. PASSGEN_CONFIG wins over both.
    """
    override = os.getenv("PASSGEN_CONFIG")
    if override:
        return override
    appdata = os.getenv("APPDATA")
    if appdata:
        return os.path.join(appdata, "PassGen", "config.json")
    return os.path.join(os.path.expanduser("~"), ".passgen", "config.json")


def read_json_bytes(b: bytes) -> dict:
    return json.loads(b.decode("utf-8"))


def dump_json_bytes(obj: dict) -> bytes:
    return json.dumps(obj, ensure_ascii=False, indent=2).encode("utf-8")
