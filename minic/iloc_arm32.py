"""ARM32 assembly instruction sequences (ILOC) and their textual output."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TextIO

from minic.platform_arm32 import FP_REG_NO, REG_NAMES, TMP_REG_NO, const_expr, is_disp


@dataclass
class ArmInst:
    """A single ARM32 assembly instruction, label, comment or placeholder."""

    opcode: str
    result: str = ""
    arg1: str = ""
    arg2: str = ""
    cond: str = ""
    addition: str = ""
    dead: bool = False

    def replace(
        self,
        opcode: str,
        result: str = "",
        arg1: str = "",
        arg2: str = "",
        cond: str = "",
        addition: str = "",
    ) -> None:
        """Replace the contents of the instruction in place."""
        self.opcode = opcode
        self.result = result
        self.arg1 = arg1
        self.arg2 = arg2
        self.cond = cond
        self.addition = addition

    def set_dead(self) -> None:
        """Mark the instruction as dead so it is no longer emitted."""
        self.dead = True

    @property
    def is_label(self) -> bool:
        return self.result == ":"

    def render(self) -> str:
        """Text of the instruction; empty for dead or placeholder instructions."""
        if self.dead or not self.opcode:
            return ""

        text = self.opcode + self.cond

        if self.result:
            text += self.result if self.result == ":" else " " + self.result

        for operand in (self.arg1, self.arg2, self.addition):
            if operand:
                text += "," + operand

        return text


class ILocArm32:
    """An ordered sequence of ARM32 instructions with helpers to build it."""

    def __init__(self) -> None:
        self.code: list[ArmInst] = []

    def _emit(self, *args: str) -> ArmInst:
        inst = ArmInst(*args)
        self.code.append(inst)
        return inst

    def comment(self, text: str) -> None:
        """Append a comment line."""
        self._emit("@", text)

    def to_str(self, num: int, flag: bool = True) -> str:
        """Number as text, prefixed with '#' for immediate addressing when flag is set."""
        return ("#" if flag else "") + str(num)

    def label(self, name: str) -> None:
        """Append a label definition."""
        self._emit(name, ":")

    def inst(self, op: str, rs: str, arg1: str = "", arg2: str = "") -> None:
        """Append a generic instruction with up to two source operands."""
        self._emit(op, rs, arg1, arg2)

    def load_imm(self, rs_reg_no: int, constant: int) -> None:
        """Load a 32-bit immediate into a register with movw and, if needed, movt."""
        reg = REG_NAMES[rs_reg_no]
        self._emit("movw", reg, "#:lower16:" + str(constant))
        if (constant >> 16) & 0xFFFF:
            self._emit("movt", reg, "#:upper16:" + str(constant))

    def load_symbol(self, rs_reg_no: int, name: str) -> None:
        """Load the address of a symbol into a register."""
        reg = REG_NAMES[rs_reg_no]
        self._emit("movw", reg, "#:lower16:" + name)
        self._emit("movt", reg, "#:upper16:" + name)

    def load_base(self, rs_reg_no: int, base_reg_no: int, disp: int) -> None:
        """Load a word from base register plus displacement."""
        rs_reg = REG_NAMES[rs_reg_no]
        base = REG_NAMES[base_reg_no]

        if is_disp(disp):
            if disp:
                base += "," + self.to_str(disp)
        else:
            self.load_imm(rs_reg_no, disp)
            base += "," + rs_reg

        self._emit("ldr", rs_reg, "[" + base + "]")

    def store_base(
        self, src_reg_no: int, base_reg_no: int, disp: int, tmp_reg_no: int = TMP_REG_NO
    ) -> None:
        """Store a word at base register plus displacement, using tmp_reg_no if needed."""
        base = REG_NAMES[base_reg_no]

        if is_disp(disp):
            if disp:
                base += "," + self.to_str(disp)
        else:
            self.load_imm(tmp_reg_no, disp)
            base += "," + REG_NAMES[tmp_reg_no]

        self._emit("str", REG_NAMES[src_reg_no], "[" + base + "]")

    def mov_reg(self, rs_reg_no: int, src_reg_no: int) -> None:
        """Copy one register into another."""
        self._emit("mov", REG_NAMES[rs_reg_no], REG_NAMES[src_reg_no])

    def lea_stack(self, rs_reg_no: int, base_reg_no: int, offset: int) -> None:
        """Load the address base register plus offset into a register."""
        rs_reg = REG_NAMES[rs_reg_no]
        base_reg = REG_NAMES[base_reg_no]

        if const_expr(offset):
            self._emit("add", rs_reg, base_reg, self.to_str(offset))
        else:
            self.load_imm(rs_reg_no, offset)
            self._emit("add", rs_reg, base_reg, rs_reg)

    def alloc_stack(
        self, max_dep: int, max_call_arg_count: int, tmp_reg_no: int = TMP_REG_NO
    ) -> None:
        """Reserve the stack frame: locals plus space for stack-passed call arguments."""
        stack_args = max(max_call_arg_count - 4, 0)
        off = max_dep + stack_args * 4

        if off == 0:
            return

        if const_expr(off):
            self._emit("sub", "sp", "sp", self.to_str(off))
        else:
            self.load_imm(tmp_reg_no, off)
            self._emit("sub", "sp", "sp", REG_NAMES[tmp_reg_no])

        self.inst("add", REG_NAMES[FP_REG_NO], "sp", self.to_str(stack_args * 4))

    def call_fun(self, name: str) -> None:
        """Call a function by name."""
        self._emit("bl", name)

    def nop(self) -> None:
        """Append an empty placeholder instruction."""
        self._emit("")

    def jump(self, label: str) -> None:
        """Append an unconditional branch to a label."""
        self._emit("b", label)

    def delete_unused_labels(self) -> None:
        """Mark labels that no live branch refers to as dead."""
        labels = [
            inst
            for inst in self.code
            if not inst.dead and inst.opcode.startswith(".") and inst.is_label
        ]
        for label_inst in labels:
            used = any(
                not inst.dead
                and inst.opcode.startswith("b")
                and inst.result == label_inst.opcode
                for inst in self.code
            )
            if not used:
                label_inst.set_dead()

    def output(self, file: TextIO, output_empty: bool = False) -> None:
        """Write the assembly text; labels start in column one, others are tabbed."""
        for inst in self.code:
            text = inst.render()
            if inst.is_label:
                file.write(text + "\n")
            elif text:
                file.write("\t" + text + "\n")
            elif output_empty:
                file.write("\n")