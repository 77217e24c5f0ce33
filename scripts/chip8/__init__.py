from .cpu import Chip8, Quirks, Status
from .display import Display
from .errors import (
    Chip8Error, DecodeError, StackOverflow, StackUnderflow, OperandRangeError, RomTooLarge,
)
from .keypad import Keypad
from .memory import Memory, Stack, load_rom
from .opcodes import Op, Instruction, decode
from .timers import Timers
