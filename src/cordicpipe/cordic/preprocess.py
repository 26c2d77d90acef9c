from nmigen import Module, Signal, Cat, Const, Mux, signed
from nmutil.pipemodbase import PipeModBase

from cordicpipe.cordic.pipe_data import (CordicData,
                                         CordicRotationInputData,
                                         CordicVectoringInputData)


class CordicRotationPre(PipeModBase):
    """ quadrant reduction ahead of the rotation stages.

        the angle code wraps at 2*pi, so its top two bits are the
        quadrant q.  the vector is turned by q*pi/2 with a swap/negate
        and the remaining bits, z = angle - q*pi/2, lie in [0, pi/2):
        inside the range the micro-rotations converge on.

            q=0: ( x,  y)   q=1: (-y,  x)
            q=2: (-x, -y)   q=3: ( y, -x)
    """
    def __init__(self, pspec):
        super().__init__(pspec, "rotationpre")

    def ispec(self):
        return CordicRotationInputData(self.pspec, "pre_i")

    def ospec(self):
        return CordicData(self.pspec, "pre_o")

    def elaborate(self, platform):
        m = Module()
        comb = m.d.comb
        guard = self.pspec.guard
        awidth = self.pspec.angle_width

        # move x/y up into the guard-extended width
        x = Signal(signed(self.pspec.internal_width), reset_less=True)
        y = Signal(signed(self.pspec.internal_width), reset_less=True)
        comb += x.eq(self.i.x << guard)
        comb += y.eq(self.i.y << guard)

        quadrant = Signal(2, reset_less=True)
        comb += quadrant.eq(self.i.z[awidth-2:])
        comb += self.o.z.eq(Cat(self.i.z[:awidth-2], Const(0, 2)))

        with m.Switch(quadrant):
            with m.Case(0):
                comb += self.o.x.eq(x)
                comb += self.o.y.eq(y)
            with m.Case(1):
                comb += self.o.x.eq(-y)
                comb += self.o.y.eq(x)
            with m.Case(2):
                comb += self.o.x.eq(-x)
                comb += self.o.y.eq(-y)
            with m.Case(3):
                comb += self.o.x.eq(y)
                comb += self.o.y.eq(-x)

        return m


class CordicVectoringPre(PipeModBase):
    """ right half-plane normalisation ahead of the vectoring stages.

        a vector with x < 0 is reflected through the origin and the
        residual seeded with pi (y >= 0) or -pi (y < 0).  in the wrapped
        angle format +pi and -pi are the same code, and everything the
        stages add to it wraps, so the result lands in the quadrant
        the vector started in.
    """
    def __init__(self, pspec):
        super().__init__(pspec, "vectoringpre")

    def ispec(self):
        return CordicVectoringInputData(self.pspec, "pre_i")

    def ospec(self):
        return CordicData(self.pspec, "pre_o")

    def elaborate(self, platform):
        m = Module()
        comb = m.d.comb
        guard = self.pspec.guard
        consts = self.pspec.constants

        x = Signal(signed(self.pspec.internal_width), reset_less=True)
        y = Signal(signed(self.pspec.internal_width), reset_less=True)
        comb += x.eq(self.i.x << guard)
        comb += y.eq(self.i.y << guard)

        pi = Const(consts.angle_pi(), signed(self.pspec.angle_width+1))

        with m.If(self.i.x < 0):
            comb += self.o.x.eq(-x)
            comb += self.o.y.eq(-y)
            comb += self.o.z.eq(Mux(self.i.y >= 0, pi, -pi))
        with m.Else():
            comb += self.o.x.eq(x)
            comb += self.o.y.eq(y)
            comb += self.o.z.eq(0)

        return m
