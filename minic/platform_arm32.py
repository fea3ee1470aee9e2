"""ARM32 platform facts: register names, immediates and displacements."""

MAX_REG_NUM = 16
MAX_USABLE_REG_NUM = 11

TMP_REG_NO = 10
FP_REG_NO = 11
SP_REG_NO = 13
LX_REG_NO = 14

REG_NAMES = (
    "r0",
    "r1",
    "r2",
    "r3",
    "r4",
    "r5",
    "r6",
    "r7",
    "r8",
    "r9",
    "r10",
    "fp",
    "ip",
    "sp",
    "lr",
    "pc",
)

_MASK32 = 0xFFFFFFFF


def _rotate_left_two(num: int) -> int:
    return ((num << 2) | (num >> 30)) & _MASK32


def _is_rotated_imm(num: int) -> bool:
    value = num & _MASK32
    for _ in range(16):
        if value <= 0xFF:
            return True
        value = _rotate_left_two(value)
    return False


def const_expr(num: int) -> bool:
    """Whether num or -num is an 8-bit value rotated by an even amount."""
    return _is_rotated_imm(num) or _is_rotated_imm(-num)


def is_disp(num: int) -> bool:
    """Whether num fits as a load/store displacement."""
    return -4096 < num < 4096


def is_reg(name: str) -> bool:
    """Whether name is a register name."""
    return name in REG_NAMES