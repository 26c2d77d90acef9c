from nmigen.cli import rtlil
from nmigen.test.utils import FHDLTestCase
from nmutil.iocontrol import PrevControl, NextControl

from cordicpipe.cordic.cores import CordicRotation
from cordic_model import run_cordic, to_fixed, from_fixed
from pipe_runner import run_pipe
import unittest
import math
import random

FRACBITS = 13


class RotationTestCase(FHDLTestCase):
    def run_test(self, dut, inputs, name):
        res = run_pipe(dut, inputs, vcd_name=name)
        expected = [run_cordic(dut.pspec, *vec) for vec in inputs]
        self.assertEqual(len(res.outputs), len(inputs))
        for vec, out, exp in zip(inputs, res.outputs, expected):
            msg = "rotate {}: expected {} got {}".format(vec, exp, out)
            self.assertEqual(out, exp, msg)
        return res

    def check_float(self, dut, inputs, outputs, tol=2e-3):
        K = 1.0 if dut.pspec.gain_comp else dut.pspec.constants.gain()
        consts = dut.pspec.constants
        for (x, y, z), (cos, sin) in zip(inputs, outputs):
            x = from_fixed(x, FRACBITS)
            y = from_fixed(y, FRACBITS)
            a = consts.angle_to_float(z)
            e_cos = K * (x*math.cos(a) - y*math.sin(a))
            e_sin = K * (x*math.sin(a) + y*math.cos(a))
            cos = from_fixed(cos, FRACBITS)
            sin = from_fixed(sin, FRACBITS)
            print(f"angle {a}: cos {cos} ({e_cos}) sin {sin} ({e_sin})")
            self.assertLess(abs(cos - e_cos), tol)
            self.assertLess(abs(sin - e_sin), tol)

    def unit_inputs(self, dut, angles):
        one = to_fixed(1.0, FRACBITS)
        consts = dut.pspec.constants
        return [(one, 0, consts.float_to_angle(a)) for a in angles]

    def test_rand(self):
        dut = CordicRotation()
        angles = [random.uniform(-math.pi, math.pi) for i in range(100)]
        inputs = self.unit_inputs(dut, angles)
        res = self.run_test(dut, inputs, "rotation_rand")
        self.check_float(dut, inputs, res.outputs)

    def test_rand_vectors(self):
        dut = CordicRotation()
        inputs = []
        for i in range(100):
            r = random.uniform(0, 1.0)
            a = random.uniform(-math.pi, math.pi)
            inputs.append((to_fixed(r*math.cos(a), FRACBITS),
                           to_fixed(r*math.sin(a), FRACBITS),
                           random.randrange(-(1 << 15), 1 << 15)))
        res = self.run_test(dut, inputs, "rotation_vectors")
        self.check_float(dut, inputs, res.outputs)

    def test_axes(self):
        dut = CordicRotation()
        angles = [0, math.pi/2, -math.pi, -math.pi/2]
        inputs = self.unit_inputs(dut, angles)
        res = self.run_test(dut, inputs, "rotation_axes")
        self.check_float(dut, inputs, res.outputs)
        # axis angles land within one output LSB of the exact value
        one = to_fixed(1.0, FRACBITS)
        exact = [(one, 0), (0, one), (-one, 0), (0, -one)]
        for (cos, sin), (e_cos, e_sin) in zip(res.outputs, exact):
            self.assertLessEqual(abs(cos - e_cos), 1, (cos, sin))
            self.assertLessEqual(abs(sin - e_sin), 1, (cos, sin))

    def test_pi_2(self):
        dut = CordicRotation()
        inputs = self.unit_inputs(dut, [math.pi/2])
        res = self.run_test(dut, inputs, "rotation_pi_2")
        cos, sin = res.outputs[0]
        self.assertLess(abs(from_fixed(cos, FRACBITS)), 2e-3)
        self.assertLess(abs(from_fixed(sin, FRACBITS) - 1), 2e-3)

    def test_no_gain_comp(self):
        dut = CordicRotation(gain_comp=False)
        angles = [random.uniform(-math.pi, math.pi) for i in range(50)]
        inputs = self.unit_inputs(dut, angles)
        res = self.run_test(dut, inputs, "rotation_nogain")
        self.check_float(dut, inputs, res.outputs)

    def test_small_config(self):
        dut = CordicRotation(xy_width=12, angle_width=12, iterations=10,
                             guard=3)
        inputs = []
        for i in range(50):
            inputs.append((to_fixed(1.0, 9), 0,
                           random.randrange(-(1 << 11), 1 << 11)))
        self.run_test(dut, inputs, "rotation_small")

    def test_latency(self):
        dut = CordicRotation(iterations=8)
        inputs = self.unit_inputs(dut, [0.1, 0.2, -1.0, 2.5])
        res = self.run_test(dut, inputs, "rotation_latency")
        for admitted, (emitted, out) in zip(res.admitted, res.emitted):
            self.assertEqual(emitted - admitted, 9)

    def test_rtlil(self):
        dut = CordicRotation(iterations=4)
        vl = rtlil.convert(dut, ports=dut.ports())
        self.assertIn("cordicstage3", vl)

    def test_handshake_ports(self):
        dut = CordicRotation(iterations=4)
        self.assertIsInstance(dut.p, PrevControl)
        self.assertIsInstance(dut.n, NextControl)
        names = [s.name for s in dut.ports()]
        for name in ("p_valid_i", "p_ready_o", "n_valid_o", "n_ready_i",
                     "p_data_i_x", "p_data_i_y", "p_data_i_z",
                     "n_data_o_cos", "n_data_o_sin"):
            self.assertIn(name, names)
        self.assertEqual(len(names), len(set(names)))
        vl = rtlil.convert(dut, ports=dut.ports())
        self.assertIn("p_ready_o", vl)
        self.assertIn("n_valid_o", vl)


if __name__ == "__main__":
    unittest.main()
