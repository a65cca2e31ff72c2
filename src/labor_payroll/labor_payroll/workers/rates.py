from __future__ import annotations

from typing import Optional

from ..projects.model import Project
from .model import Worker


def recommended_rate(worker: Worker, shifts: float, project: Optional[Project] = None) -> int:
    """Đơn giá đề xuất cho MỘT công.

    Ưu tiên giá riêng của công nhật (1 công / 2 công), sau đó lương ngày,
    cuối cùng mới lấy đơn giá của công trình.
    """
    shifts = float(shifts)

    if shifts == 2 and worker.rate_2_cong:
        return int(round(worker.rate_2_cong / 2))
    if shifts == 1 and worker.rate_1_cong:
        return int(worker.rate_1_cong)
    if worker.daily_rate:
        return int(worker.daily_rate)

    if project is not None:
        if shifts == 2 and project.double_rate:
            return int(round(project.double_rate / 2))
        if project.standard_rate:
            return int(project.standard_rate)
    return 0
