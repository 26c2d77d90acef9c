from enum import Enum, unique

from cordicpipe.cordic.constants import CordicConstants, CordicConfigError


@unique
class CordicMode(Enum):
    ROTATION = 0
    VECTORING = 1


class CordicPipeSpec:
    """ CORDIC Pipeline Specification.

    :attribute xy_width: external bitwidth of x/y (and cos/sin/mag), signed
    :attribute angle_width: bitwidth of the angle / residual z, signed.
                            the full code range maps onto [-pi, pi)
    :attribute iterations: number of micro-rotation stages
    :attribute guard: extra low-order bits carried on x/y inside the pipe.
                      stripped again by the gain stage
    :attribute gain_comp: multiply the outputs by 1/K
    :attribute mode: CordicMode.ROTATION or CordicMode.VECTORING

    a pspec is passed down every stage of the pipeline (see
    cordicpipe/cordic/pipe_data.py for how the data records are sized
    from it).  nothing writes to it after construction: the mode in
    particular is fixed for the lifetime of a pipeline.
    """

    def __init__(self, xy_width, angle_width, iterations, guard=0,
                 gain_comp=True, mode=CordicMode.ROTATION):
        for name, value in (("xy_width", xy_width),
                            ("angle_width", angle_width),
                            ("iterations", iterations)):
            if value <= 0:
                raise CordicConfigError("%s must be positive, got %d" %
                                        (name, value))
        if guard < 0:
            raise CordicConfigError("guard must not be negative, got %d" %
                                    guard)
        if not isinstance(mode, CordicMode):
            raise CordicConfigError("unknown CORDIC mode %r" % (mode,))

        self.xy_width = xy_width
        self.angle_width = angle_width
        self.iterations = iterations
        self.guard = guard
        self.gain_comp = bool(gain_comp)
        self.mode = mode

        # x/y carry the guard bits inside the pipe
        self.internal_width = xy_width + guard
        # preprocessor register plus one register per stage
        self.latency = iterations + 1

        self.constants = CordicConstants(angle_width, self.internal_width,
                                         iterations)

    @property
    def is_rotation(self):
        return self.mode == CordicMode.ROTATION

    def __repr__(self):
        return ("CordicPipeSpec(xy_width=%d, angle_width=%d, iterations=%d, "
                "guard=%d, gain_comp=%s, mode=%s)" %
                (self.xy_width, self.angle_width, self.iterations,
                 self.guard, self.gain_comp, self.mode.name))
