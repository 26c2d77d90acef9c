from nmigen import Module, Signal, Const, signed
from nmutil.pipemodbase import PipeModBase

from cordicpipe.cordic.pipe_data import CordicData, cordic_output_data


class CordicGainStage(PipeModBase):
    """ post-scaling of the final stage, combinatorial.

        with gain_comp x/y are multiplied by 1/K before the guard bits are
        dropped, otherwise the guard bits are dropped straight away and
        the outputs still carry the CORDIC gain K.  dropping bits is an
        arithmetic shift: results round towards minus infinity.

        rotation outputs (cos, sin) from x/y, vectoring outputs
        (mag, theta) from x and the residual z.
    """
    def __init__(self, pspec):
        super().__init__(pspec, "gaincomp")

    def ispec(self):
        return CordicData(self.pspec, "gain_i")

    def ospec(self):
        return cordic_output_data(self.pspec, "gain_o")

    def scale(self, m, v):
        pspec = self.pspec
        consts = pspec.constants
        res = Signal(signed(pspec.xy_width), reset_less=True)
        if pspec.gain_comp:
            recip = Const(consts.gain_reciprocal(),
                          signed(pspec.internal_width+1))
            prod = Signal(signed(v.width + recip.width), reset_less=True)
            m.d.comb += prod.eq(v * recip)
            m.d.comb += res.eq(prod >> (consts.gain_fracbits + pspec.guard))
        else:
            m.d.comb += res.eq(v >> pspec.guard)
        return res

    def elaborate(self, platform):
        m = Module()
        comb = m.d.comb

        if self.pspec.is_rotation:
            comb += self.o.cos.eq(self.scale(m, self.i.x))
            comb += self.o.sin.eq(self.scale(m, self.i.y))
        else:
            comb += self.o.mag.eq(self.scale(m, self.i.x))
            comb += self.o.theta.eq(self.i.z)

        return m
