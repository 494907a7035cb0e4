"""
Kernel layer.

Pure integer curve math used by the engine in `bondcurve/core/curve/`.
Kernels know nothing about snapshots, fees or completion; they price a single
move along one curve and report the intermediate values they used.
"""
