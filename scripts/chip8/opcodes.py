from collections import namedtuple
from enum import Enum

from .errors import DecodeError, OperandRangeError

NUM_REGISTERS = 16


# ******************** OPCODES SECTION
class Op(Enum):
    """one member per instruction of the canonical CHIP-8 table, the value is the word pattern"""
    CLS = 0x00E0
    RET = 0x00EE
    SYS = 0x0000
    JP = 0x1000
    CALL = 0x2000
    SE_BYTE = 0x3000
    SNE_BYTE = 0x4000
    SE_REG = 0x5000
    LD_BYTE = 0x6000
    ADD_BYTE = 0x7000
    LD_REG = 0x8000
    OR = 0x8001
    AND = 0x8002
    XOR = 0x8003
    ADD_REG = 0x8004
    SUB = 0x8005
    SHR = 0x8006
    SUBN = 0x8007
    SHL = 0x800E
    SNE_REG = 0x9000
    LD_I = 0xA000
    JP_V0 = 0xB000
    RND = 0xC000
    DRW = 0xD000
    SKP = 0xE09E
    SKNP = 0xE0A1
    LD_VX_DT = 0xF007
    LD_VX_K = 0xF00A
    LD_DT_VX = 0xF015
    LD_ST_VX = 0xF018
    ADD_I = 0xF01E
    LD_F = 0xF029
    LD_B = 0xF033
    LD_MEM_VX = 0xF055
    LD_VX_MEM = 0xF065


# WATCH OUT: masks order is important!!!
# as the lookup stops as soon as it finds a match
MASKS = {
    0xFFFF: [Op.CLS, Op.RET],
    0xF0FF: [Op.SKP, Op.SKNP, Op.LD_VX_DT, Op.LD_VX_K, Op.LD_DT_VX, Op.LD_ST_VX,
             Op.ADD_I, Op.LD_F, Op.LD_B, Op.LD_MEM_VX, Op.LD_VX_MEM],
    0xF00F: [Op.SE_REG, Op.LD_REG, Op.OR, Op.AND, Op.XOR, Op.ADD_REG, Op.SUB,
             Op.SHR, Op.SUBN, Op.SHL, Op.SNE_REG],
    0xF000: [Op.SYS, Op.JP, Op.CALL, Op.SE_BYTE, Op.SNE_BYTE, Op.LD_BYTE, Op.ADD_BYTE,
             Op.LD_I, Op.JP_V0, Op.RND, Op.DRW],
}
PATTERNS = {mask: {op.value: op for op in ops} for mask, ops in MASKS.items()}


class Instruction(namedtuple("Instruction", "op word x y n kk nnn")):
    """
    a decoded instruction: the opcode tag plus every operand field of the word
        x   -> second nibble (register index)
        y   -> third nibble (register index)
        n   -> lowest nibble
        kk  -> lowest byte
        nnn -> lowest 12 bits (address)
    """
    __slots__ = ()

    def __new__(cls, op, word, x, y, n, kk, nnn):
        for reg in (x, y):
            if not 0 <= reg < NUM_REGISTERS:
                raise OperandRangeError(f"Register V{reg} doesn't exist (instruction 0x{word:04x})")
        return super().__new__(cls, op, word, x, y, n, kk, nnn)


def match(word):
    """return the opcode tag for the word, None if it isn't part of the instruction table"""
    for mask, patterns in PATTERNS.items():
        op = patterns.get(word & mask)
        if op is not None:
            return op
    return None


def decode(word, pc=0):
    """decode the 16 bit word into an Instruction, raise DecodeError if it's unknown"""
    op = match(word)
    if op is None:
        raise DecodeError(word, pc)
    return Instruction(
        op=op,
        word=word,
        x=(word & 0x0F00) >> 8,
        y=(word & 0x00F0) >> 4,
        n=word & 0x000F,
        kk=word & 0x00FF,
        nnn=word & 0x0FFF,
    )
