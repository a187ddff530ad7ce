"""
SpinalHDL code generation.

Submodules are imported directly (``ipxgen.generator.spinal``) because the
model layer depends on ``base_generator``.
"""
