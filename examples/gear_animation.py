import spurtrain as st
from spurtrain.spurtrain_build123d import GearBuilder, transform2Location
from build123d import *
from ocp_vscode import *
import numpy as np

n1 = 11
n2 = 33
n3 = 17

gear1 = st.Gear(number_of_teeth=n1, module=2)
gear2 = gear1.add_gear(n2, angle=0)
gear3 = gear2.add_gear(n3, angle=np.pi / 3)
train = st.GearTrain(gear1)

a_gears = []
for k, gear in enumerate(train):
    builder = GearBuilder(gear, height=5, color=st.COLORS[k])
    a_gear = Compound(children=[builder.part], label=f"gear{k+1}")
    a_gear.location = transform2Location(gear.transform)
    a_gears.append(a_gear)

gears = Compound(children=a_gears, label="gears")

n = 30
duration = 2
# two pitches of the driver
drive_angle = gear1.pitch_angle * 2

time_track = np.linspace(0, duration, n + 1)
animation = Animation(gears)
for k, gear in enumerate(train):
    # tracks are relative to the placed location
    track = np.linspace(0, drive_angle * gear.rotation_speed * 180 / np.pi, n + 1)
    animation.add_track(f"/gears/gear{k+1}", "rz", time_track, track)
show(gears)

# Start animation
animation.animate(speed=1)
