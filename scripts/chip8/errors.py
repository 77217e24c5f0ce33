# ******************** ERRORS SECTION
# every error raised by the interpreter is fatal for the running program:
# the driving loop catches Chip8Error, dumps the machine state and exits


class Chip8Error(Exception):
    pass


class DecodeError(Chip8Error):
    """the instruction word doesn't match any opcode of the instruction table"""
    def __init__(self, word, pc):
        self.word, self.pc = word, pc
        super().__init__(f"Unknown instruction 0x{word:04x} at address 0x{pc:04x}")


class StackOverflow(Chip8Error):
    pass


class StackUnderflow(Chip8Error):
    pass


class OperandRangeError(Chip8Error):
    pass


class RomTooLarge(Chip8Error):
    pass
