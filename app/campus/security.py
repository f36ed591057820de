from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor, TimeoutError as FuturesTimeoutError
from dataclasses import dataclass

from werkzeug.security import check_password_hash, generate_password_hash

from app.campus.errors import HashTimeoutError

# Hashing is CPU-bound on purpose; keep it off the request thread.
_hash_pool = ThreadPoolExecutor(max_workers=4, thread_name_prefix="pwhash")


def _run_bounded(fn, *args, timeout: float):
    future = _hash_pool.submit(fn, *args)
    try:
        return future.result(timeout=timeout)
    except FuturesTimeoutError as e:
        future.cancel()
        raise HashTimeoutError("Password hashing timed out. Try again.") from e


@dataclass(frozen=True)
class PasswordHasher:
    method: str
    timeout: float

    def hash(self, password: str) -> str:
        return _run_bounded(generate_password_hash, password, self.method, timeout=self.timeout)

    def verify(self, password_hash: str, password: str) -> bool:
        return bool(_run_bounded(check_password_hash, password_hash, password, timeout=self.timeout))


def hasher_from_config(config: dict) -> PasswordHasher:
    timeout = config.get("PASSWORD_HASH_TIMEOUT")
    return PasswordHasher(
        method=(config.get("PASSWORD_HASH_METHOD") or "scrypt:32768:8:1").strip(),
        timeout=float(10 if timeout is None else timeout),
    )
