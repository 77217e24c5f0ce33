import unittest
from chip8.errors import OperandRangeError
from chip8.keypad import Keypad


class TestKeypad(unittest.TestCase):
    def test_flags(self):
        k = Keypad()
        k.press(0xA)
        self.assertTrue(k[0xA])
        self.assertFalse(k[0xB])
        k.release(0xA)
        self.assertFalse(k[0xA])

    def test_setitem(self):
        k = Keypad()
        k[3] = True
        self.assertTrue(k[3])
        k[3] = False
        self.assertFalse(k[3])

    def test_last_pressed(self):
        k = Keypad()
        self.assertIsNone(k.last_pressed())
        k.press(1)
        k.press(7)
        self.assertEqual(k.last_pressed(), 7)
        self.assertIsNone(k.last_pressed())
        self.assertTrue(k[1])       # flags survive, only the transitions are consumed

    def test_holding_is_not_a_new_transition(self):
        k = Keypad()
        k.press(2)
        k.forget()
        k.press(2)
        self.assertTrue(k.untouched())

    def test_state_stays_bounded(self):
        k = Keypad()
        for _ in range(10000):
            k.press(5)
            k.release(5)
        self.assertEqual(k.last_key, 5)
        self.assertEqual(len(vars(k)), 2)
        self.assertEqual(len(k.keys), 16)
        self.assertEqual(k.last_pressed(), 5)
        self.assertTrue(k.untouched())

    def test_unknown_key(self):
        with self.assertRaises(OperandRangeError):
            Keypad()[0x10]


if __name__ == "__main__":
    unittest.main()
