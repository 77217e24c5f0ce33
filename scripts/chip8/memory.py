from .errors import RomTooLarge, StackOverflow, StackUnderflow


# ******************** STATIC SECTION
C8_FONTS = [0xF0, 0x90, 0x90, 0x90, 0xF0,  # 0
            0x20, 0x60, 0x20, 0x20, 0x70,  # 1
            0xF0, 0x10, 0xF0, 0x80, 0xF0,  # 2
            0xF0, 0x10, 0xF0, 0x10, 0xF0,  # 3
            0x90, 0x90, 0xF0, 0x10, 0x10,  # 4
            0xF0, 0x80, 0xF0, 0x10, 0xF0,  # 5
            0xF0, 0x80, 0xF0, 0x90, 0xF0,  # 6
            0xF0, 0x10, 0x20, 0x40, 0x40,  # 7
            0xF0, 0x90, 0xF0, 0x90, 0xF0,  # 8
            0xF0, 0x90, 0xF0, 0x10, 0xF0,  # 9
            0xF0, 0x90, 0xF0, 0x90, 0x90,  # A
            0xE0, 0x90, 0xE0, 0x90, 0xE0,  # B
            0xF0, 0x80, 0x80, 0x80, 0xF0,  # C
            0xE0, 0x90, 0x90, 0x90, 0xE0,  # D
            0xF0, 0x80, 0xF0, 0x80, 0xF0,  # E
            0xF0, 0x80, 0xF0, 0x80, 0x80]  # F

MEMORY_SIZE = 4096
FONT_START_ADDRESS = 0x000
FONT_GLYPH_SIZE = 5
ROM_START_ADDRESS = 0x200
STACK_SIZE = 16


# ******************** MEMORY SECTION
# ********** WRAPS A LIST TO REPRESENT A STACK WITH A LIMITED SIZE OF 16 ADDRESSES
class Stack:
    def __init__(self, capacity=STACK_SIZE):
        self.addr_list = []
        self.capacity = capacity

    def __len__(self):
        return len(self.addr_list)

    def __repr__(self):
        return "[" + ", ".join(f"0x{a:04x}" for a in self.addr_list) + "]"

    def append(self, address):
        if len(self.addr_list) >= self.capacity:
            raise StackOverflow(f"The CHIP-8 stack can contain at most {self.capacity} addresses. Limit exceeded")
        self.addr_list.append(address)

    def pop(self):
        if not self.addr_list:
            raise StackUnderflow("Return with an empty CHIP-8 stack")
        return self.addr_list.pop()

# ********** WRAPS A BYTEARRAY TO REPRESENT THE MAIN MEMORY WITH A LIMITED SIZE OF 4KB
class Memory:
    """
    addresses wrap around the 4KB boundary, so that a 16 bit address register
    pointing past the end of memory still lands on a valid cell
    """
    def __init__(self, size=MEMORY_SIZE):
        self.size = size
        self.inner = bytearray(size)
        self.inner[FONT_START_ADDRESS:FONT_START_ADDRESS+len(C8_FONTS)] = bytes(C8_FONTS)

    def __len__(self):
        return self.size

    def __setitem__(self, key, value):
        self.inner[key % self.size] = value & 0xFF

    def __getitem__(self, index):
        return self.inner[index % self.size]

    def read(self, address, count):
        """read count consecutive bytes starting at address"""
        return bytes(self[address + i] for i in range(count))

    def write(self, address, data):
        """write a sequence of bytes starting at address"""
        for i, value in enumerate(data):
            self[address + i] = value

    def load(self, program, start=ROM_START_ADDRESS):
        """copy the program image verbatim starting at the load offset"""
        if len(program) > self.size - start:
            raise RomTooLarge(f"The program is {len(program)} bytes, at most {self.size - start} bytes fit in memory")
        self.inner[start:start+len(program)] = bytes(program)


def glyph_address(digit):
    """address of the 5 bytes font glyph for the hex digit"""
    return FONT_START_ADDRESS + (digit & 0xF) * FONT_GLYPH_SIZE


def load_rom(path):
    """read a ROM file from the user specified path"""
    with open(path, mode='rb') as f:
        return f.read()
