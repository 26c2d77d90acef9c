import math


class CordicConfigError(ValueError):
    """ raised when a CORDIC pipeline is constructed with a configuration
        it cannot be built with.  never raised by a running pipeline.
    """


def cordic_gain(iterations):
    """ the CORDIC gain K after the given number of micro-rotations
    """
    An = 1.0
    for i in range(iterations):
        An *= math.sqrt(1 + 2**(-2*i))
    return An


class CordicConstants:
    """ fixed-point constants for one CORDIC configuration.

        angles are in "binary radians": the full signed range of
        angle_width bits spans [-pi, pi), so pi itself is the code
        -2**(angle_width-1), which it shares with -pi.

        the atan table has one entry per bit of angle resolution
        (angle_width entries): beyond that atan(2**-i) rounds to zero.
        asking for more iterations than the table holds is an error
        at construction time.
    """

    def __init__(self, angle_width, data_width, iterations):
        if angle_width < 3:
            # two quadrant bits plus at least one bit of residual
            raise CordicConfigError("angle_width must be at least 3, got %d"
                                    % angle_width)
        self.angle_width = angle_width
        self.data_width = data_width
        self.iterations = iterations

        self.depth = angle_width
        if iterations > self.depth:
            raise CordicConfigError("%d iterations requested but the atan "
                                    "table holds %d entries" %
                                    (iterations, self.depth))

        self.PI = 1 << (angle_width-1)
        self.atan_table = tuple(
            int(round(math.atan(2**(-i)) * self.PI / math.pi))
            for i in range(self.depth))

        # 1/K as an unsigned fraction with gain_fracbits fractional bits.
        # 1/K < 1, so it fits in a signed data_width value
        self.gain_fracbits = data_width - 1
        self.K = cordic_gain(iterations)
        self.gain_recip = int(round((1 << self.gain_fracbits) / self.K))

    def atan_constant(self, i):
        if not 0 <= i < self.iterations:
            raise CordicConfigError("atan constant %d requested of %d "
                                    "iterations" % (i, self.iterations))
        return self.atan_table[i]

    def angle_pi(self):
        return self.PI

    def angle_half_pi(self):
        return self.PI >> 1

    def gain(self):
        return self.K

    def gain_reciprocal(self):
        return self.gain_recip

    def angle_to_float(self, code):
        return code * math.pi / self.PI

    def float_to_angle(self, radians):
        """ nearest angle code, wrapped into [-pi, pi)
        """
        code = int(round(radians * self.PI / math.pi))
        return ((code + self.PI) % (self.PI << 1)) - self.PI

