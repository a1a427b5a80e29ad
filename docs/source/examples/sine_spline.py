import numpy as np

from pentaspline import BoundaryCondition, spline_cubic_set, spline_cubic_val
from pentaspline.core.logger import get_logger, setup

setup()
log = get_logger("pentaspline.examples.sine")

# 36 samples of sin(t) between 0 and 2*pi
t = np.linspace(0.0, 2.0 * np.pi, 36)
y = np.sin(t)

# Natural end conditions: y'' = 0 at both ends
ypp = spline_cubic_set(t, y, BoundaryCondition.natural(), BoundaryCondition.natural())

tval = np.pi
log.info("Spline value at t = pi: %.6e", spline_cubic_val(t, y, ypp, tval, 0))
log.info("Spline first derivative at t = pi: %.6e", spline_cubic_val(t, y, ypp, tval, 1))
log.info("Spline second derivative at t = pi: %.6e", spline_cubic_val(t, y, ypp, tval, 2))
log.info("Spline value at t = pi/2: %.6e", spline_cubic_val(t, y, ypp, tval / 2.0, 0))

print("         t        yknot         yval        y'val       y''val")
for ti, yi in zip(t, y):
    s0 = spline_cubic_val(t, y, ypp, ti, 0)
    s1 = spline_cubic_val(t, y, ypp, ti, 1)
    s2 = spline_cubic_val(t, y, ypp, ti, 2)
    print(f"{ti:10.5f} {yi:12.5f} {s0:12.5f} {s1:12.5f} {s2:12.5f}")
