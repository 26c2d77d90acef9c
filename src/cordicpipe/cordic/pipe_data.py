from nmigen import Signal, signed


class CordicRotationInputData:
    """ vector (x, y) and the angle z to rotate it by
    """

    def __init__(self, pspec, name="i"):
        self.x = Signal(signed(pspec.xy_width), name="%s_x" % name)
        self.y = Signal(signed(pspec.xy_width), name="%s_y" % name)
        self.z = Signal(signed(pspec.angle_width), name="%s_z" % name)

    def __iter__(self):
        yield self.x
        yield self.y
        yield self.z

    def eq(self, i):
        return [self.x.eq(i.x), self.y.eq(i.y), self.z.eq(i.z)]

    def ports(self):
        return list(self)


class CordicVectoringInputData:
    """ vector (x, y) to measure
    """

    def __init__(self, pspec, name="i"):
        self.x = Signal(signed(pspec.xy_width), name="%s_x" % name)
        self.y = Signal(signed(pspec.xy_width), name="%s_y" % name)

    def __iter__(self):
        yield self.x
        yield self.y

    def eq(self, i):
        return [self.x.eq(i.x), self.y.eq(i.y)]

    def ports(self):
        return list(self)


class CordicData:
    """ the state between two stages: guard-extended x/y, residual z
    """

    def __init__(self, pspec, name="s"):
        width = pspec.internal_width
        self.x = Signal(signed(width), name="%s_x" % name, reset_less=True)
        self.y = Signal(signed(width), name="%s_y" % name, reset_less=True)
        self.z = Signal(signed(pspec.angle_width), name="%s_z" % name,
                        reset_less=True)

    def __iter__(self):
        yield self.x
        yield self.y
        yield self.z

    def eq(self, i):
        ret = [self.z.eq(i.z), self.x.eq(i.x), self.y.eq(i.y)]
        return ret


class CordicRotationOutputData:

    def __init__(self, pspec, name="o"):
        self.cos = Signal(signed(pspec.xy_width), name="%s_cos" % name)
        self.sin = Signal(signed(pspec.xy_width), name="%s_sin" % name)

    def __iter__(self):
        yield self.cos
        yield self.sin

    def eq(self, i):
        return [self.cos.eq(i.cos), self.sin.eq(i.sin)]

    def ports(self):
        return list(self)


class CordicVectoringOutputData:

    def __init__(self, pspec, name="o"):
        self.mag = Signal(signed(pspec.xy_width), name="%s_mag" % name)
        self.theta = Signal(signed(pspec.angle_width), name="%s_theta" % name)

    def __iter__(self):
        yield self.mag
        yield self.theta

    def eq(self, i):
        return [self.mag.eq(i.mag), self.theta.eq(i.theta)]

    def ports(self):
        return list(self)


def cordic_input_data(pspec, name="i"):
    if pspec.is_rotation:
        return CordicRotationInputData(pspec, name)
    return CordicVectoringInputData(pspec, name)


def cordic_output_data(pspec, name="o"):
    if pspec.is_rotation:
        return CordicRotationOutputData(pspec, name)
    return CordicVectoringOutputData(pspec, name)
