# %%
import numpy as np
import shad
import plotly.graph_objects as go
from plotly.subplots import make_subplots

fig_layout = dict(
    width=1000, height=500
)

# %% Expansion coefficients of two point sources on the unit sphere
max_order = 12
colatitude = np.linspace(0, np.pi, 91)[:, None]
azimuth = np.linspace(0, 2 * np.pi, 181)

coefficients = shad.spherical_harmonics_all(max_order, np.deg2rad(30), np.deg2rad(60))[0].conj()
coefficients -= shad.spherical_harmonics_all(max_order, np.deg2rad(100), np.deg2rad(210))[0].conj()

harmonics = shad.SphericalHarmonics(max_order, colatitude=colatitude, azimuth=azimuth)
field = harmonics.apply(coefficients)
d_colatitude = harmonics.apply(coefficients, derivative='colatitude')
d_azimuth = harmonics.apply(coefficients, derivative='azimuth')

# The surface gradient, with the 1 / sin(colatitude) factor for the azimuth component.
with np.errstate(divide='ignore', invalid='ignore'):
    gradient = np.sqrt(np.abs(d_colatitude)**2 + np.abs(d_azimuth / np.sin(colatitude))**2)

# %% Show the field and the magnitude of the gradient
fig = make_subplots(rows=1, cols=2, subplot_titles=['Field', 'Surface gradient'])
fig.add_trace(go.Heatmap(x=np.rad2deg(azimuth), y=np.rad2deg(colatitude[:, 0]), z=field.real, colorscale='RdBu', showscale=False), row=1, col=1)
fig.add_trace(go.Heatmap(x=np.rad2deg(azimuth), y=np.rad2deg(colatitude[:, 0]), z=gradient, colorscale='Viridis'), row=1, col=2)
fig.update_yaxes(autorange='reversed')
fig.update_layout(**fig_layout)
fig.show()

# %% Errors in single precision, relative to double precision
orders = np.arange(1, 21)
errors = []
for order in orders:
    single = shad.spherical_harmonics_all(order, colatitude, azimuth, precision='single')[0]
    double = shad.spherical_harmonics_all(order, colatitude, azimuth, precision='double')[0]
    scale = np.max(np.abs(double), axis=(1, 2))
    errors.append(np.max(np.max(np.abs(single - double), axis=(1, 2)) / scale))

fig = go.Figure(go.Scatter(x=orders, y=errors, mode='lines+markers'))
fig.update_yaxes(type='log', title='Max relative error')
fig.update_xaxes(title='Max order')
fig.add_vline(x=shad.config.config('max_reliable_single_order'), line_dash='dash')
fig.update_layout(**fig_layout)
fig.show()
