from nmigen import Module, Signal
from nmutil.pipemodbase import PipeModBase

from cordicpipe.cordic.constants import CordicConfigError
from cordicpipe.cordic.pipe_data import CordicData


class CordicStage(PipeModBase):
    """ one micro-rotation, combinatorial.

        direction d is +1 when z >= 0 (rotation) or y < 0 (vectoring),
        -1 otherwise:

            x' = x - d * (y >> i)
            y' = y + d * (x >> i)
            z' = z - d * atan(2**-i)

        in vectoring mode d = -sign(y), so z collects +sign(y)*atan(2**-i)
        and ends at atan2(y, x) while y is driven to zero.
    """
    def __init__(self, pspec, stagenum):
        if not 0 <= stagenum < pspec.iterations:
            raise CordicConfigError("stage %d out of range for %d iterations"
                                    % (stagenum, pspec.iterations))
        self.stagenum = stagenum
        super().__init__(pspec, "cordicstage%d" % stagenum)

    def ispec(self):
        return CordicData(self.pspec, "stage%d_i" % self.stagenum)

    def ospec(self):
        return CordicData(self.pspec, "stage%d_o" % self.stagenum)

    def elaborate(self, platform):
        m = Module()
        comb = m.d.comb

        dx = Signal(self.i.x.shape())
        dy = Signal(self.i.y.shape())
        dz = Signal(self.i.z.shape())
        angle = self.pspec.constants.atan_constant(self.stagenum)

        comb += dx.eq(self.i.y >> self.stagenum)
        comb += dy.eq(self.i.x >> self.stagenum)
        comb += dz.eq(angle)

        # sign(0) counts as positive in both modes
        d_pos = Signal(reset_less=True)
        if self.pspec.is_rotation:
            comb += d_pos.eq(self.i.z >= 0)
        else:
            comb += d_pos.eq(self.i.y < 0)

        with m.If(d_pos):
            comb += self.o.x.eq(self.i.x - dx)
            comb += self.o.y.eq(self.i.y + dy)
            comb += self.o.z.eq(self.i.z - dz)
        with m.Else():
            comb += self.o.x.eq(self.i.x + dx)
            comb += self.o.y.eq(self.i.y - dy)
            comb += self.o.z.eq(self.i.z + dz)

        return m
