"""
Host-side rendering of simulation trails: projection, splatting, grading,
still images and video encoding.
"""

from attractorscope.render.encoder import encode_video
from attractorscope.render.preview import RenderConfig, TrailRenderer, save_png
