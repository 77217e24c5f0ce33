import os
import random
from enum import Enum
from functools import wraps

from .display import Display
from .errors import Chip8Error
from .keypad import Keypad
from .memory import Memory, Stack, ROM_START_ADDRESS, glyph_address
from .opcodes import Op, decode
from .timers import Timers

DEBUG = True if int(os.getenv('DEBUG', 0)) >= 1 else False


# ******************** UTILITIES SECTION
def asm(msg):
    """decorator to print out the ASM of the instruction being called"""
    def decorator(fn):
        @wraps(fn)
        def wrapper_fn(*args, **kwargs):
            mem_addr = args[0].pc - 0x2     # args[0] equals self, pc already points to the next instruction
            ins = args[1]
            fn(*args, **kwargs)
            if DEBUG: print(f"mem_addr: 0x{mem_addr:04x}    instruction: " + msg.format(**ins._asdict()))
        return wrapper_fn
    return decorator


class Quirks:
    """
    COMPATIBILITY QUIRKS TABLE
    https://games.gulrak.net/cadmium/chip8-opcode-table.html#quirk6

    every flag off gives the usual modern interpretation,
    every flag on gives the behaviour of the original COSMAC VIP interpreter
    """
    def __init__(self, vf_reset=False, shift_vy=False, memory_increment=False, jump_vx=False):
        self.vf_reset = vf_reset                    # quirk 1: OR/AND/XOR reset VF
        self.shift_vy = shift_vy                    # quirk 2: SHR/SHL shift Vy into Vx
        self.memory_increment = memory_increment    # quirk 6: LD [I]/LD Vx,[I] leave I past the last register
        self.jump_vx = jump_vx                      # BXNN jumps to XNN + VX

    def __repr__(self):
        flags = [k for k, v in vars(self).items() if v]
        return f"Quirks({', '.join(flags)})"

    @classmethod
    def cosmac(cls):
        return cls(vf_reset=True, shift_vy=True, memory_increment=True, jump_vx=True)


class Status(Enum):
    RUNNING = "running"
    AWAITING_KEY = "awaiting key"


# ******************** CPU SECTION
class Chip8:
    """
    the whole machine state: memory, registers, stack, timers, display and keypad
    the driving loop calls step() once per instruction and tick_timers() as the time goes by
    """
    def __init__(self, display=None, keypad=None, timers=None, quirks=None, rng=None):
        self.display = display if display is not None else Display()
        self.keypad = keypad if keypad is not None else Keypad()
        self.timers = timers if timers is not None else Timers()
        self.quirks = quirks if quirks is not None else Quirks()
        self.rng = rng if rng is not None else random.Random()
        self.instructions = {
            Op.CLS: self._clear_screen,
            Op.RET: self._return,
            Op.SYS: self._sys,
            Op.JP: self._jump,
            Op.CALL: self._call_addr,
            Op.SE_BYTE: self._skip_if_eq,
            Op.SNE_BYTE: self._skip_if_not_eq,
            Op.SE_REG: self._skip_if_eq_regs,
            Op.LD_BYTE: self._set_vk,
            Op.ADD_BYTE: self._add_to_vk,
            Op.LD_REG: self._set_vx_to_vy,
            Op.OR: self._set_vx_or_vy,
            Op.AND: self._set_vx_and_vy,
            Op.XOR: self._set_vx_xor_vy,
            Op.ADD_REG: self._add_vx_vy,
            Op.SUB: self._sub_vx_vy,
            Op.SHR: self._shr,
            Op.SUBN: self._subn_vx_vy,
            Op.SHL: self._shl,
            Op.SNE_REG: self._skip_if_not_eq_regs,
            Op.LD_I: self._set_idx,
            Op.JP_V0: self._jump_plus,
            Op.RND: self._random_byte_and,
            Op.DRW: self._to_screen,
            Op.SKP: self._skip_if_pressed,
            Op.SKNP: self._skip_if_not_pressed,
            Op.LD_VX_DT: self._set_vx_dt,
            Op.LD_VX_K: self._wait_keypress,
            Op.LD_DT_VX: self._set_dt_vx,
            Op.LD_ST_VX: self._set_st,
            Op.ADD_I: self._add_to_idx,
            Op.LD_F: self._select_char,
            Op.LD_B: self._bcd_repr,
            Op.LD_MEM_VX: self._store_vregs,
            Op.LD_VX_MEM: self._load_vregs,
        }
        missing = set(Op) - set(self.instructions)
        if missing:
            raise Chip8Error(f"No handler for {sorted(op.name for op in missing)}")
        self.reset()

    def reset(self):
        """zero every register, reload the fonts and clear the screen"""
        self.mem = Memory()
        self.stack = Stack()
        self.v_regs = [0] * 16
        self.pc = ROM_START_ADDRESS
        self.idx = 0            # specify where the sprites reside in memory
        self.status = Status.RUNNING
        self.waiting_register = None
        self.timers.reset()
        self.display.clear()

    def load(self, program):
        """copy the program image into memory at the ROM start address"""
        self.mem.load(program)
        if DEBUG: print(f"A program of {len(program)} bytes has been loaded successfully")

    def __str__(self):
        registers = (f"PC_REGISTER:0x{self.pc:04x} | IDX_REGISTER:0x{self.idx:04x} | "
                     f"VARIABLE_REGISTERS:{self.v_regs}")
        stack = f"STACK:{self.stack}"
        timers = f"TIMERS:{self.timers}"
        flags = f"STATUS: {self.status.value} | KEYPAD: {self.keypad!r} | QUIRKS: {self.quirks}"
        return f"{registers}\n{stack}\n{timers}\n{flags}"

    @property
    def dt(self):
        return self.timers.dt

    @property
    def st(self):
        return self.timers.st

    @property
    def sound_active(self):
        return self.timers.sound_active

    @property
    def waiting(self):
        return self.status is Status.AWAITING_KEY

    # ********** INSTRUCTIONS
    @asm("CLS")
    def _clear_screen(self, ins):
        self.display.clear()

    @asm("RET")
    def _return(self, ins):
        """return from a subroutine"""
        self.pc = self.stack.pop()

    @asm("SYS 0x{nnn:03x}")
    def _sys(self, ins):
        """machine code routine of the original interpreters, ignored"""

    @asm("JP 0x{nnn:03x}")
    def _jump(self, ins):
        self.pc = ins.nnn

    @asm("CALL 0x{nnn:03x}")
    def _call_addr(self, ins):
        self.stack.append(self.pc)
        self.pc = ins.nnn

    @asm("SE V{x:X}, {kk}")
    def _skip_if_eq(self, ins):
        if self.v_regs[ins.x] == ins.kk:
            self._goto_next_instruction()

    @asm("SNE V{x:X}, {kk}")
    def _skip_if_not_eq(self, ins):
        if self.v_regs[ins.x] != ins.kk:
            self._goto_next_instruction()

    @asm("SE V{x:X}, V{y:X}")
    def _skip_if_eq_regs(self, ins):
        if self.v_regs[ins.x] == self.v_regs[ins.y]:
            self._goto_next_instruction()

    @asm("SNE V{x:X}, V{y:X}")
    def _skip_if_not_eq_regs(self, ins):
        if self.v_regs[ins.x] != self.v_regs[ins.y]:
            self._goto_next_instruction()

    @asm("LD V{x:X}, {kk}")
    def _set_vk(self, ins):
        """set the value of one of the 16 variable registers, Vx"""
        self.v_regs[ins.x] = ins.kk

    @asm("ADD V{x:X}, {kk}")
    def _add_to_vk(self, ins):
        """add to the value already present in one of the variable registers, VF is left alone"""
        self.v_regs[ins.x] = (self.v_regs[ins.x] + ins.kk) & 0xFF

    @asm("LD V{x:X}, V{y:X}")
    def _set_vx_to_vy(self, ins):
        self.v_regs[ins.x] = self.v_regs[ins.y]

    @asm("OR V{x:X}, V{y:X}")
    def _set_vx_or_vy(self, ins):
        self.v_regs[ins.x] |= self.v_regs[ins.y]
        if self.quirks.vf_reset:
            self.v_regs[0xF] = 0

    @asm("AND V{x:X}, V{y:X}")
    def _set_vx_and_vy(self, ins):
        self.v_regs[ins.x] &= self.v_regs[ins.y]
        if self.quirks.vf_reset:
            self.v_regs[0xF] = 0

    @asm("XOR V{x:X}, V{y:X}")
    def _set_vx_xor_vy(self, ins):
        self.v_regs[ins.x] ^= self.v_regs[ins.y]
        if self.quirks.vf_reset:
            self.v_regs[0xF] = 0

    # the arithmetic flags are computed from the operands before Vx changes
    # and VF is written last, so it holds the flag even when x is F
    @asm("ADD V{x:X}, V{y:X}")
    def _add_vx_vy(self, ins):
        """set Vx = Vx + Vy, VF = carry"""
        total = self.v_regs[ins.x] + self.v_regs[ins.y]
        carry = 1 if total > 0xFF else 0
        self.v_regs[ins.x] = total & 0xFF
        self.v_regs[0xF] = carry

    @asm("SUB V{x:X}, V{y:X}")
    def _sub_vx_vy(self, ins):
        """set Vx = Vx - Vy, VF = NOT borrow"""
        vx, vy = self.v_regs[ins.x], self.v_regs[ins.y]
        no_borrow = 1 if vx >= vy else 0
        self.v_regs[ins.x] = (vx - vy) & 0xFF
        self.v_regs[0xF] = no_borrow

    @asm("SUBN V{x:X}, V{y:X}")
    def _subn_vx_vy(self, ins):
        """set Vx = Vy - Vx, VF = NOT borrow"""
        vx, vy = self.v_regs[ins.x], self.v_regs[ins.y]
        no_borrow = 1 if vy >= vx else 0
        self.v_regs[ins.x] = (vy - vx) & 0xFF
        self.v_regs[0xF] = no_borrow

    @asm("SHR V{x:X}, V{y:X}")
    def _shr(self, ins):
        """set Vx = Vx SHR 1, VF = the bit shifted out"""
        value = self.v_regs[ins.y] if self.quirks.shift_vy else self.v_regs[ins.x]
        lsb = value & 0x1
        self.v_regs[ins.x] = value >> 1
        self.v_regs[0xF] = lsb

    @asm("SHL V{x:X}, V{y:X}")
    def _shl(self, ins):
        """set Vx = Vx SHL 1, VF = the bit shifted out"""
        value = self.v_regs[ins.y] if self.quirks.shift_vy else self.v_regs[ins.x]
        msb = (value & 0x80) >> 7
        self.v_regs[ins.x] = (value << 1) & 0xFF
        self.v_regs[0xF] = msb

    @asm("LD I, 0x{nnn:03x}")
    def _set_idx(self, ins):
        self.idx = ins.nnn

    @asm("JP V0, 0x{nnn:03x}")
    def _jump_plus(self, ins):
        offset = self.v_regs[ins.x] if self.quirks.jump_vx else self.v_regs[0x0]
        self.pc = (ins.nnn + offset) & 0xFFFF

    @asm("RND V{x:X}, 0x{kk:02x}")
    def _random_byte_and(self, ins):
        self.v_regs[ins.x] = self.rng.randint(0, 255) & ins.kk

    @asm("DRW V{x:X}, V{y:X}, {n}")
    def _to_screen(self, ins):
        """display n-byte sprite starting at memory location I at (Vx, Vy), set VF = collision"""
        x, y = self.v_regs[ins.x], self.v_regs[ins.y]
        sprite = self.mem.read(self.idx, ins.n)
        collision = self.display.draw_sprite(x, y, sprite)
        self.v_regs[0xF] = 1 if collision else 0

    @asm("SKP V{x:X}")
    def _skip_if_pressed(self, ins):
        """skip the following instruction if the key corresponding to the hex value stored in Vx is pressed"""
        if self.keypad[self.v_regs[ins.x] & 0xF]:
            self._goto_next_instruction()

    @asm("SKNP V{x:X}")
    def _skip_if_not_pressed(self, ins):
        """skip the following instruction if the key corresponding to the hex value stored in Vx is NOT pressed"""
        if not self.keypad[self.v_regs[ins.x] & 0xF]:
            self._goto_next_instruction()

    @asm("LD V{x:X}, DT")
    def _set_vx_dt(self, ins):
        self.v_regs[ins.x] = self.timers.dt

    @asm("LD V{x:X}, K")
    def _wait_keypress(self, ins):
        """
        suspend the machine until a key is pressed, step() stores it in Vx
        pc stays on this instruction for as long as the machine waits
        """
        self.pc = (self.pc - 0x2) & 0xFFFF
        self.keypad.forget()
        self.waiting_register = ins.x
        self.status = Status.AWAITING_KEY

    @asm("LD DT, V{x:X}")
    def _set_dt_vx(self, ins):
        self.timers.dt = self.v_regs[ins.x]

    @asm("LD ST, V{x:X}")
    def _set_st(self, ins):
        self.timers.st = self.v_regs[ins.x]

    @asm("ADD I, V{x:X}")
    def _add_to_idx(self, ins):
        self.idx = (self.idx + self.v_regs[ins.x]) & 0xFFFF

    @asm("LD F, V{x:X}")
    def _select_char(self, ins):
        """set I to location of sprite for digit Vx"""
        self.idx = glyph_address(self.v_regs[ins.x])

    @asm("LD B, V{x:X}")
    def _bcd_repr(self, ins):
        """store the hundreds digit of Vx in memory at I, the tens digit at I+1, the ones digit at I+2"""
        value = self.v_regs[ins.x]
        self.mem.write(self.idx, (value // 100, value // 10 % 10, value % 10))

    @asm("LD [I], V{x:X}")
    def _store_vregs(self, ins):
        """store registers V0 through Vx (included) in memory starting at location I"""
        self.mem.write(self.idx, self.v_regs[:ins.x+1])
        if self.quirks.memory_increment:
            self.idx = (self.idx + ins.x + 1) & 0xFFFF

    @asm("LD V{x:X}, [I]")
    def _load_vregs(self, ins):
        """read registers V0 through Vx (included) from memory starting at location I"""
        self.v_regs[:ins.x+1] = list(self.mem.read(self.idx, ins.x + 1))
        if self.quirks.memory_increment:
            self.idx = (self.idx + ins.x + 1) & 0xFFFF

    # ********** FETCH / DECODE / EXECUTE
    def _goto_next_instruction(self):
        self.pc = (self.pc + 0x2) & 0xFFFF

    def fetch(self):
        """each instruction is two bytes long, the first one is the high byte"""
        return self.mem[self.pc] << 8 | self.mem[self.pc + 1]

    def _resume(self):
        """leave the key wait state if a key went down in the meantime"""
        key = self.keypad.last_pressed()
        if key is None:
            return False
        self.v_regs[self.waiting_register] = key
        self.waiting_register = None
        self.status = Status.RUNNING
        self._goto_next_instruction()
        if DEBUG: print(f"key 0x{key:x} pressed, resuming at 0x{self.pc:04x}")
        return True

    def step(self):
        """
        execute exactly one instruction
        while waiting for a keypress, only check whether one arrived
        """
        if self.status is Status.AWAITING_KEY:
            self._resume()
            return
        opcode = self.fetch()
        instruction = decode(opcode, self.pc)
        self._goto_next_instruction()
        self.instructions[instruction.op](instruction)

    def run(self, steps):
        """emulate a fixed number of steps"""
        for _ in range(steps):
            self.step()

    def tick_timers(self, now=None):
        return self.timers.tick(now)
