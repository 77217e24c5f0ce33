from .errors import OperandRangeError

NUM_KEYS = 16


# ******************** INPUT SECTION
class Keypad:
    """
    16 keys pressed flags plus the last key that went from released to pressed
    the flags are written by the input collaborator only, the interpreter just reads them
    """
    def __init__(self):
        self.keys = [False] * NUM_KEYS
        self.last_key = None        # most recent transition to pressed, None if there's none pending

    def __getitem__(self, key):
        return self.keys[self._check(key)]

    def __setitem__(self, key, value):
        """keypad[key] = True/False presses or releases the key"""
        if value:
            self.press(key)
        else:
            self.release(key)

    def __repr__(self):
        return "".join(f"{k:X}" for k in range(NUM_KEYS) if self.keys[k]) or "-"

    @staticmethod
    def _check(key):
        if not 0 <= key < NUM_KEYS:
            raise OperandRangeError(f"Key 0x{key:x} doesn't exist on the CHIP-8 keypad")
        return key

    def press(self, key):
        if not self.keys[self._check(key)]:
            self.last_key = key
        self.keys[key] = True

    def release(self, key):
        self.keys[self._check(key)] = False

    def untouched(self):
        return self.last_key is None

    def last_pressed(self):
        """get (and forget) the key that most recently went down, None if there's none"""
        key = self.last_key
        self.last_key = None
        return key

    def forget(self):
        """drop the pending transition, used when starting to wait for a new keypress"""
        self.last_key = None
