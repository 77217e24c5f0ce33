# CHIP-8 INFO
# https://chip-8.github.io/extensions/#chip-8
# https://chip-8.github.io/links/
#
# MASTERING CHIP-8
# https://github.com/mattmikolay/chip-8/wiki/Mastering-CHIP%E2%80%908
#
# TEST SUITE
# https://github.com/Timendus/chip8-test-suite


import argparse
import sys

from .screen import Screen, SCALE
from .cpu import Chip8, Quirks, DEBUG
from .errors import Chip8Error
from .memory import load_rom
import pygame
from pygame.locals import (
    K_0, K_1, K_2, K_3,
    K_4, K_5, K_6, K_7,
    K_8, K_9, K_a, K_b,
    K_c, K_d, K_e, K_f,
)

KEY_MAPPINGS = {
    K_0: 0x0,
    K_1: 0x1,
    K_2: 0x2,
    K_3: 0x3,
    K_4: 0x4,
    K_5: 0x5,
    K_6: 0x6,
    K_7: 0x7,
    K_8: 0x8,
    K_9: 0x9,
    K_a: 0xA,
    K_b: 0xB,
    K_c: 0xC,
    K_d: 0xD,
    K_e: 0xE,
    K_f: 0xF,
}

FPS = 60
INSTRUCTIONS_PER_SECOND = 700


def get_args(argv=None):
    parser = argparse.ArgumentParser(prog="chip8", description="CHIP-8 interpreter")
    parser.add_argument("-f", "--file", required=True, help="input rom file")
    parser.add_argument("--ips", type=int, default=INSTRUCTIONS_PER_SECOND, help="instructions executed per second")
    parser.add_argument("--scale", type=int, default=SCALE, help="size in pixels of a CHIP-8 pixel")
    parser.add_argument("--cosmac", action="store_true", help="emulate the quirks of the original COSMAC VIP interpreter")
    return parser.parse_args(argv)


def handle_events(keypad):
    """forward the keyboard to the keypad, return False when the user asks to quit"""
    for event in pygame.event.get():
        if event.type == pygame.QUIT:
            return False
        if event.type == pygame.KEYDOWN:
            if event.key == pygame.K_ESCAPE:
                return False
            if event.key in KEY_MAPPINGS:
                keypad[KEY_MAPPINGS[event.key]] = True     # register keypress
        elif event.type == pygame.KEYUP and event.key in KEY_MAPPINGS:
            keypad[KEY_MAPPINGS[event.key]] = False
    return True


# ******************** ENTRY POINT SECTION
def main(argv=None):
    args = get_args(argv)
    # pygame initialization
    pygame.init()
    clock = pygame.time.Clock()
    pygame.display.set_caption(args.file.split('/')[-1])
    # IO
    s = Screen(s=args.scale)
    # CPU
    chip = Chip8(quirks=Quirks.cosmac() if args.cosmac else Quirks())
    chip.load(load_rom(args.file))
    steps_per_frame = max(args.ips // FPS, 1)
    # emulation loop
    run = True
    try:
        while run:
            run = handle_events(chip.keypad)
            # the instructions are paced by the frame rate, the timers by the wall clock
            chip.run(steps_per_frame)
            chip.tick_timers()
            if s.render(chip.display):
                s.refresh()
            clock.tick(FPS)
    except Chip8Error as err:
        if DEBUG: print(chip.display)
        sys.exit(f"********** THE EMULATOR CRASHED: {err}\n{chip}")
    finally:
        pygame.quit()


if __name__ == "__main__":
    main()
