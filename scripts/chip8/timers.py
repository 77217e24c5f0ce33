from time import perf_counter

TIMER_FREQ = 60.0   # both timers count down 60 times per second


# ******************** TIMERS SECTION
class Timers:
    """
    delay and sound timers, decremented from the elapsed wall-clock time
    and not from the number of executed instructions
    """
    def __init__(self, clock=perf_counter, freq=TIMER_FREQ):
        self.clock = clock
        self.freq = freq
        self.dt = 0     # delay timer, active when non-zero
        self.st = 0     # sound timer, active when non-zero
        self.last = clock()
        self.elapsed = 0.0  # time not yet turned into a whole tick

    def __repr__(self):
        return f"DT:{self.dt} | ST:{self.st}"

    @property
    def sound_active(self):
        return self.st > 0

    def reset(self):
        self.dt = self.st = 0
        self.last = self.clock()
        self.elapsed = 0.0

    def decrement(self, ticks=1):
        """count both timers down by ticks, never below zero"""
        self.dt = max(self.dt - ticks, 0)
        self.st = max(self.st - ticks, 0)

    def tick(self, now=None):
        """
        apply every 60Hz period elapsed since the previous call
        return the number of periods applied
        """
        now = self.clock() if now is None else now
        self.elapsed += max(now - self.last, 0.0)
        self.last = now
        ticks = int(self.elapsed * self.freq + 1e-9)
        if ticks:
            self.elapsed = max(self.elapsed - ticks / self.freq, 0.0)
            self.decrement(ticks)
        return ticks
