"""A plain register allocator for loading values into scratch registers.

Values handed to the allocator must carry a ``load_reg_id`` attribute, which
is -1 while the value holds no register.
"""

from __future__ import annotations

from typing import Any, Optional

from minic.platform_arm32 import MAX_USABLE_REG_NUM


class SimpleRegisterAllocator:
    """Hands out registers r0-r10, spilling the oldest holder when none is free."""

    def __init__(self) -> None:
        self.occupied: set[int] = set()
        self.used: set[int] = set()
        self.reg_values: list[Any] = []

    @staticmethod
    def _check(no: int) -> None:
        if not 0 <= no < MAX_USABLE_REG_NUM:
            raise IndexError(f"register {no} is not an allocatable register")

    def _mark(self, no: int) -> None:
        self.occupied.add(no)
        self.used.add(no)

    def allocate(self, var: Optional[Any] = None, no: int = -1) -> int:
        """Give var a register, preferring no, else the lowest free one.

        If every register is taken, the value that took its register first
        gives it up.
        """
        if var is not None and var.load_reg_id != -1:
            return var.load_reg_id

        if no != -1:
            self._check(no)

        if no != -1 and no not in self.occupied:
            regno = no
        else:
            regno = next((k for k in range(MAX_USABLE_REG_NUM) if k not in self.occupied), -1)

        if regno != -1:
            self._mark(regno)
        else:
            if not self.reg_values:
                raise RuntimeError("no register is free and none can be spilled")
            oldest = self.reg_values.pop(0)
            regno = oldest.load_reg_id
            oldest.load_reg_id = -1

        if var is not None:
            var.load_reg_id = regno
            self.reg_values.append(var)

        return regno

    def occupy(self, no: int) -> None:
        """Take register no, forcing out any value that holds it."""
        self._check(no)
        if no in self.occupied:
            self.free_reg(no)
        self._mark(no)

    def free_var(self, var: Optional[Any]) -> None:
        """Release the register held by var, if any."""
        if var is not None and var.load_reg_id != -1:
            self.occupied.discard(var.load_reg_id)
            self.reg_values.remove(var)
            var.load_reg_id = -1

    def free_reg(self, no: int) -> None:
        """Release register no and detach the value holding it."""
        if no == -1:
            return
        self.occupied.discard(no)
        holder = next((val for val in self.reg_values if val.load_reg_id == no), None)
        if holder is not None:
            holder.load_reg_id = -1
            self.reg_values.remove(holder)