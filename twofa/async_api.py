"""
async_api.py — Async / Future / callback adapters cho các thao tác cần entropy.

Logic chỉ nằm ở generators.py; module này chỉ chuyển lời gọi os.urandom
(có thể block) sang executor. Coroutine và submit_* dùng chung một policy:
chạy trên `executor` do caller truyền vào, hoặc trên một ThreadPoolExecutor
riêng cho từng lời gọi (shutdown ngay sau khi submit). Không có state dùng chung.

Ví dụ:
    key = await generate_key_async(32)

    def done(err, codes):
        if err is None:
            print(codes)
    submit_generate_backup_codes(8, callback=done)
"""

import asyncio
from concurrent.futures import Executor, Future, ThreadPoolExecutor
from typing import Callable, List, Optional

from twofa.config import DEFAULT_KEY_LENGTH, DEFAULT_PATTERN
from twofa.generators import generate_backup_code, generate_backup_codes, generate_key

Callback = Callable[[Optional[BaseException], object], None]


def _submit(func, args, callback: Optional[Callback], executor: Optional[Executor]) -> Future:
    if executor is not None:
        future = executor.submit(func, *args)
    else:
        pool = ThreadPoolExecutor(max_workers=1, thread_name_prefix="twofa")
        future = pool.submit(func, *args)
        # task đã submit vẫn chạy xong; worker thread tự thoát sau đó
        pool.shutdown(wait=False)
    if callback is not None:
        def _done(f: Future):
            error = f.exception()
            callback(error, None if error is not None else f.result())
        future.add_done_callback(_done)
    return future


# --- asyncio ---------------------------------------------------------------
async def generate_key_async(length: int = DEFAULT_KEY_LENGTH, executor: Optional[Executor] = None) -> str:
    return await asyncio.wrap_future(_submit(generate_key, (length,), None, executor))


async def generate_backup_code_async(
    pattern: str = DEFAULT_PATTERN, executor: Optional[Executor] = None
) -> str:
    return await asyncio.wrap_future(_submit(generate_backup_code, (pattern,), None, executor))


async def generate_backup_codes_async(
    count: int, pattern: str = DEFAULT_PATTERN, executor: Optional[Executor] = None
) -> List[str]:
    return await asyncio.wrap_future(_submit(generate_backup_codes, (count, pattern), None, executor))


# --- concurrent.futures + node-style callback ------------------------------
def submit_generate_key(
    length: int = DEFAULT_KEY_LENGTH,
    callback: Optional[Callback] = None,
    executor: Optional[Executor] = None,
) -> Future:
    """
    Chạy generate_key trên executor, trả về Future.

    Nếu có `callback`, nó được gọi đúng một lần: callback(error, key).
    """
    return _submit(generate_key, (length,), callback, executor)


def submit_generate_backup_codes(
    count: int,
    pattern: str = DEFAULT_PATTERN,
    callback: Optional[Callback] = None,
    executor: Optional[Executor] = None,
) -> Future:
    """Như submit_generate_key nhưng cho generate_backup_codes: callback(error, codes)."""
    return _submit(generate_backup_codes, (count, pattern), callback, executor)
