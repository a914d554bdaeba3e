"""
Process-wide lock for numerical library calls.

statsmodels, scikit-learn and scipy wrap parts of their fitting code in
``warnings.catch_warnings``, which saves and restores the interpreter-global
warning filter list. Overlapping blocks on different threads can leave the
filters permanently altered, so every such call made by nalufx runs under
``model_lock``.
"""

import threading

# Re-entrant so guarded helpers can call each other
model_lock = threading.RLock()
