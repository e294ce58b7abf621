"""Numba kernels for the table-driven engines.

State tables are ``int64`` arrays holding unsigned 32-bit (Mersenne
Twister) or 30-bit (Knuth) words, so every shift and mask stays exact in
signed 64-bit arithmetic.

Functions:
    - mt_sgenrand: Knuth-style 69069 initialisation of the MT table
    - mt_genrand: one tempered MT19937 output in [0, 1)
    - mt_fill: bulk draws with the (0, 1) fix-up applied
    - ran_array: Knuth's lagged-Fibonacci refill
    - ran_start_2002 / ran_start_1997: Knuth's table initialisations
"""

import numpy as np

from ..optim import optimized_jit, inline_jit

__all__ = [
    'mt_sgenrand',
    'mt_genrand',
    'mt_fill',
    'ran_array',
    'ran_start_2002',
    'ran_start_1997',
    'kt_next',
    'kt_fill',
    'KK',
    'LL',
    'MM',
    'QUALITY',
]


# =============================================================================
# Mersenne Twister
# =============================================================================
#
# state[0] is the output position ``mti``; state[1:625] is the 624-word table.

_N = 624
_M = 397
_MATRIX_A = 0x9908B0DF
_UPPER_MASK = 0x80000000
_LOWER_MASK = 0x7FFFFFFF
_TEMPERING_MASK_B = 0x9D2C5680
_TEMPERING_MASK_C = 0xEFC60000
_MASK32 = 0xFFFFFFFF

# 1 / (2^32 - 1)
_I2_32M1 = 2.328306437080797e-10


@inline_jit
def _fixup(x: float) -> float:
    if x <= 0.0:
        return 0.5 * _I2_32M1
    if 1.0 - x <= 0.0:
        return 1.0 - 0.5 * _I2_32M1
    return x


@optimized_jit
def mt_sgenrand(state: np.ndarray, seed: int) -> None:
    """Initialise the table from a 32-bit seed and set ``mti = N``."""
    seed = seed & _MASK32
    for i in range(_N):
        word = seed & 0xFFFF0000
        seed = (69069 * seed + 1) & _MASK32
        word |= (seed & 0xFFFF0000) >> 16
        seed = (69069 * seed + 1) & _MASK32
        state[i + 1] = word
    state[0] = _N


@optimized_jit
def _mt_twist(state: np.ndarray) -> None:
    kk = 0
    while kk < _N - _M:
        y = (state[kk + 1] & _UPPER_MASK) | (state[kk + 2] & _LOWER_MASK)
        mag = _MATRIX_A if (y & 1) else 0
        state[kk + 1] = state[kk + _M + 1] ^ (y >> 1) ^ mag
        kk += 1
    while kk < _N - 1:
        y = (state[kk + 1] & _UPPER_MASK) | (state[kk + 2] & _LOWER_MASK)
        mag = _MATRIX_A if (y & 1) else 0
        state[kk + 1] = state[kk + (_M - _N) + 1] ^ (y >> 1) ^ mag
        kk += 1
    y = (state[_N] & _UPPER_MASK) | (state[1] & _LOWER_MASK)
    mag = _MATRIX_A if (y & 1) else 0
    state[_N] = state[_M] ^ (y >> 1) ^ mag


@optimized_jit
def mt_genrand(state: np.ndarray) -> float:
    """One MT19937 draw in [0, 1), advancing ``state`` in place."""
    mti = state[0]
    if mti >= _N:
        if mti == _N + 1:
            mt_sgenrand(state, 4357)
        _mt_twist(state)
        mti = 0

    y = state[mti + 1]
    y ^= y >> 11
    y ^= (y << 7) & _TEMPERING_MASK_B
    y ^= (y << 15) & _TEMPERING_MASK_C
    y ^= y >> 18
    state[0] = mti + 1

    return float(y) * 2.3283064365386963e-10


@optimized_jit
def mt_fill(state: np.ndarray, out: np.ndarray) -> None:
    """Fill ``out`` with fixed-up MT draws."""
    for i in range(len(out)):
        out[i] = _fixup(mt_genrand(state))


# =============================================================================
# Knuth TAOCP lagged Fibonacci generator
# =============================================================================
#
# state[0:100] is ran_x, state[100] is the output position KT_pos.

KK = 100
LL = 37
MM = 1 << 30
QUALITY = 1009
_TT = 70

# 2^-30
_KT = 9.31322574615479e-10


@inline_jit
def _mod_diff(x: int, y: int) -> int:
    return (x - y) & (MM - 1)


@optimized_jit
def ran_array(aa: np.ndarray, n: int, ran_x: np.ndarray) -> None:
    """Generate ``n`` words into ``aa`` and advance the lag table ``ran_x``."""
    for j in range(KK):
        aa[j] = ran_x[j]
    j = KK
    while j < n:
        aa[j] = _mod_diff(aa[j - KK], aa[j - LL])
        j += 1
    i = 0
    while i < LL:
        ran_x[i] = _mod_diff(aa[j - KK], aa[j - LL])
        i += 1
        j += 1
    while i < KK:
        ran_x[i] = _mod_diff(aa[j - KK], ran_x[i - LL])
        i += 1
        j += 1


@optimized_jit
def ran_start_2002(seed: int, ran_x: np.ndarray) -> None:
    """Knuth's 2002 ``ran_start``, including the ten warm-up cycles."""
    x = np.zeros(KK + KK - 1, dtype=np.int64)
    ss = (seed + 2) & (MM - 2)
    for j in range(KK):
        x[j] = ss
        ss <<= 1
        if ss >= MM:
            ss -= MM - 2
    x[1] += 1

    ss = seed & (MM - 1)
    t = _TT - 1
    while t:
        for j in range(KK - 1, 0, -1):
            x[j + j] = x[j]
            x[j + j - 1] = 0
        for j in range(KK + KK - 2, KK - 1, -1):
            x[j - (KK - LL)] = _mod_diff(x[j - (KK - LL)], x[j])
            x[j - KK] = _mod_diff(x[j - KK], x[j])
        if ss & 1:
            for j in range(KK, 0, -1):
                x[j] = x[j - 1]
            x[0] = x[KK]
            x[LL] = _mod_diff(x[LL], x[KK])
        if ss:
            ss >>= 1
        else:
            t -= 1

    for j in range(LL):
        ran_x[j + KK - LL] = x[j]
    for j in range(LL, KK):
        ran_x[j - LL] = x[j]
    for _ in range(10):
        ran_array(x, KK + KK - 1, ran_x)


@optimized_jit
def ran_start_1997(seed: int, ran_x: np.ndarray) -> None:
    """Knuth's original (1997) ``ran_start``."""
    x = np.zeros(KK + KK - 1, dtype=np.int64)
    ss = (seed + 2) & (MM - 2)
    for j in range(KK):
        x[j] = ss
        ss <<= 1
        if ss >= MM:
            ss -= MM - 2
    x[1] += 1

    ss = seed & (MM - 1)
    t = _TT - 1
    while t:
        for j in range(KK - 1, 0, -1):
            x[j + j] = x[j]
        for j in range(KK + KK - 2, KK - LL, -2):
            x[KK + KK - 1 - j] = x[j] & (MM - 2)
        for j in range(KK + KK - 2, KK - 1, -1):
            if x[j] & 1:
                x[j - (KK - LL)] = _mod_diff(x[j - (KK - LL)], x[j])
                x[j - KK] = _mod_diff(x[j - KK], x[j])
        if ss & 1:
            for j in range(KK, 0, -1):
                x[j] = x[j - 1]
            x[0] = x[KK]
            if x[KK] & 1:
                x[LL] = _mod_diff(x[LL], x[KK])
        if ss:
            ss >>= 1
        else:
            t -= 1

    for j in range(LL):
        ran_x[j + KK - LL] = x[j]
    for j in range(LL, KK):
        ran_x[j - LL] = x[j]


@optimized_jit
def kt_next(state: np.ndarray, buf: np.ndarray) -> float:
    """One fixed-up draw; refills the lag table every 100 outputs."""
    pos = state[KK]
    if pos >= KK:
        ran_array(buf, QUALITY, state[:KK])
        pos = 0
    word = state[pos]
    state[KK] = pos + 1
    return _fixup(word * _KT)


@optimized_jit
def kt_fill(state: np.ndarray, buf: np.ndarray, out: np.ndarray) -> None:
    for i in range(len(out)):
        out[i] = kt_next(state, buf)
