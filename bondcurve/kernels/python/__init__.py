"""
Production Python kernels.

These modules are designed to be:
- deterministic (integer-only, no floats anywhere),
- checked (every add/sub/mul/div re-imposes its fixed-width bound),
- easy to audit (explicit intermediate variables, typed results).
"""
