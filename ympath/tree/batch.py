"""批量写入

将多次相互独立的写入并发执行，等待全部完成后返回。

失败语义：
    - 任意一次写入失败，整个批次立即以该异常失败
    - 已经提交给线程池的其他写入不会被取消，也不会被回滚
    - 不重试、不设超时，需要时由调用方自行控制

注意：该语义意味着批次失败后树可能处于"部分完成"的状态，
调用方需要自行保证同一子树上同一时间只有一个结构性修改。
"""

from concurrent.futures import ThreadPoolExecutor, FIRST_EXCEPTION, wait
from typing import Any, Callable, List, Sequence

from ..log import get_logger

logger = get_logger()


def run_batch(calls: Sequence[Callable[[], Any]], max_workers: int = 8) -> List[Any]:
    """执行一批写入

    Args:
        calls: 无参可调用对象列表，每个对应一次写入
        max_workers: 最大并发数，1 表示按顺序执行

    Returns:
        各次写入的返回值，顺序与 calls 一致

    Raises:
        写入抛出的原生异常（第一个失败者）

    使用示例:
        run_batch([lambda: store.save(a), lambda: store.save(b)], max_workers=4)
    """
    if not calls:
        return []

    if max_workers <= 1 or len(calls) == 1:
        # 顺序执行：第一次失败直接抛出，后续写入不再发出
        return [call() for call in calls]

    executor = ThreadPoolExecutor(
        max_workers=min(max_workers, len(calls)),
        thread_name_prefix="ympath-batch",
    )
    try:
        futures = [executor.submit(call) for call in calls]
        done, _ = wait(futures, return_when=FIRST_EXCEPTION)

        for index, future in enumerate(futures):
            if future in done and future.exception() is not None:
                error = future.exception()
                logger.warning(
                    f"批量写入失败: 第 {index + 1}/{len(futures)} 次写入出错 "
                    f"({type(error).__name__}: {error})，已提交的写入不会回滚"
                )
                raise error

        return [future.result() for future in futures]
    finally:
        # 不等待、不取消仍在执行的写入
        executor.shutdown(wait=False)


__all__ = ["run_batch"]
