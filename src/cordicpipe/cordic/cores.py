from nmigen.cli import rtlil

from cordicpipe.pipeline import CordicPipeSpec, CordicMode
from cordicpipe.cordic.cordic_pipeline import CordicBasePipe


class CordicRotation(CordicBasePipe):
    """ rotate (x, y) by the angle z: p.data_i.{x,y,z} -> n.data_o.{cos,sin}

        with (x, y) = (1, 0) the outputs are cos(z) and sin(z).
    """
    def __init__(self, xy_width=16, angle_width=16, iterations=14, guard=4,
                 gain_comp=True):
        pspec = CordicPipeSpec(xy_width, angle_width, iterations, guard,
                               gain_comp, CordicMode.ROTATION)
        super().__init__(pspec)


class CordicVectoring(CordicBasePipe):
    """ polar form of (x, y): p.data_i.{x,y} -> n.data_o.{mag,theta}

        theta is atan2(y, x) as an angle code, mag is hypot(x, y)
        (times K when gain_comp is off).
    """
    def __init__(self, xy_width=16, angle_width=16, iterations=14, guard=4,
                 gain_comp=True):
        pspec = CordicPipeSpec(xy_width, angle_width, iterations, guard,
                               gain_comp, CordicMode.VECTORING)
        super().__init__(pspec)


if __name__ == '__main__':
    for name, dut in (("cordic_rotation", CordicRotation()),
                      ("cordic_vectoring", CordicVectoring())):
        vl = rtlil.convert(dut, ports=dut.ports())
        with open("%s.il" % name, "w") as f:
            f.write(vl)
