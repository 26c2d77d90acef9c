from nmigen import Module, Signal, Elaboratable
from nmutil.iocontrol import PrevControl, NextControl

from cordicpipe.cordic.pipe_data import (CordicData, cordic_input_data,
                                         cordic_output_data)
from cordicpipe.cordic.preprocess import CordicRotationPre, CordicVectoringPre
from cordicpipe.cordic.stage import CordicStage
from cordicpipe.cordic.gain import CordicGainStage


class CordicBasePipe(Elaboratable):
    """ lock-step CORDIC pipeline with a single stall.

        slot 0 holds the preprocessor output, slot k+1 the output of stage
        k, so a sample is emitted iterations+1 clocks after admission.
        every slot has a valid flag.

        stall = valid[last] & ~ready_i: the consumer is not taking the
        result on offer.  while stalled *no* register changes (one clock
        enable for the whole pipe) and ready_o is low, so nothing is
        admitted, dropped or duplicated, and the result on offer holds.
    """
    def __init__(self, pspec):
        self.pspec = pspec

        if pspec.is_rotation:
            self.prestage = CordicRotationPre(pspec)
        else:
            self.prestage = CordicVectoringPre(pspec)
        self.cordicstages = []
        for i in range(pspec.iterations):
            self.cordicstages.append(CordicStage(pspec, i))
        self.gainstage = CordicGainStage(pspec)

        # handshake ports.  nmutil leaves the data to the user of the class
        self.p = PrevControl()
        self.n = NextControl()
        self._new_data("p_data_i", "n_data_o")

        # registered state, slot 0 to slot iterations
        self.slots = []
        self.valids = []
        for i in range(pspec.iterations + 1):
            self.slots.append(CordicData(pspec, "slot%d" % i))
            self.valids.append(Signal(name="slot%d_valid" % i))

        self.stall = Signal(reset_less=True)

    def _new_data(self, iname, oname):
        self.p.data_i = cordic_input_data(self.pspec, iname)
        self.n.data_o = cordic_output_data(self.pspec, oname)

    def elaborate(self, platform):
        m = Module()
        comb = m.d.comb
        sync = m.d.sync

        last = self.pspec.iterations
        print("cordic pipe", self.pspec.mode.name, "stages", last,
              "latency", self.pspec.latency)

        m.submodules.p = self.p
        m.submodules.n = self.n

        # combinatorial blocks between the registers
        self.prestage.setup(m, self.p.data_i)
        for i, stage in enumerate(self.cordicstages):
            stage.setup(m, self.slots[i])
        self.gainstage.setup(m, self.slots[last])

        # handshake
        comb += self.stall.eq(self.valids[last] & ~self.n.ready_i)
        comb += self.p.ready_o.eq(~self.stall)
        comb += self.n.valid_o.eq(self.valids[last])
        comb += self.n.data_o.eq(self.gainstage.process(self.slots[last]))

        # advance every slot together, or none of them
        with m.If(~self.stall):
            sync += self.slots[0].eq(self.prestage.process(self.p.data_i))
            sync += self.valids[0].eq(self.p.valid_i)
            for i, stage in enumerate(self.cordicstages):
                sync += self.slots[i+1].eq(stage.process(self.slots[i]))
                sync += self.valids[i+1].eq(self.valids[i])

        return m

    def ports(self):
        return list(self.p) + list(self.n)
