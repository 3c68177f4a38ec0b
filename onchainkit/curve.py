"""Constant-product (x * y = k) curve arithmetic with fixed-width integer limits."""

U16_MAX = (1 << 16) - 1
U32_MAX = (1 << 32) - 1
U64_MAX = (1 << 64) - 1
U128_MAX = (1 << 128) - 1

FEE_DENOMINATOR = 10_000


class CurveError(ArithmeticError):
    """Raised when a curve calculation leaves its integer range."""

    def __init__(self, message: str = "overflow") -> None:
        super().__init__(message)


def _unsigned(name: str, value: int, limit: int) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= limit:
        raise ValueError(f"{name} must be an integer between 0 and {limit}, got {value!r}")
    return value


def _nonzero(name: str, value: int) -> int:
    if value == 0:
        raise ValueError(f"{name} must be non-zero")
    return value


def _u128(value: int) -> int:
    if not 0 <= value <= U128_MAX:
        raise CurveError()
    return value


def _div(numerator: int, denominator: int) -> int:
    if denominator == 0:
        raise CurveError()
    return numerator // denominator


def k_from_xy(x: int, y: int) -> int:
    """Return the invariant k = x * y."""
    _nonzero("x", _unsigned("x", x, U64_MAX))
    _nonzero("y", _unsigned("y", y, U64_MAX))
    return _u128(x * y)


def spot_price_from_pair(x: int, y: int, precision: int) -> int:
    """Return the spot price of one token expressed in the other."""
    _nonzero("x", _unsigned("x", x, U64_MAX))
    _nonzero("y", _unsigned("y", y, U64_MAX))
    _unsigned("precision", precision, U32_MAX)
    price = _div(_div(_u128(x * precision), y), precision)
    if price > U64_MAX:
        raise CurveError()
    return price


def xy_deposit_amounts_from_l(x: int, y: int, l: int, a: int, precision: int) -> tuple[int, int]:
    """Return the amounts of X and Y to deposit for ``a`` liquidity tokens."""
    for name, value in (("x", x), ("y", y), ("l", l), ("a", a)):
        _unsigned(name, value, U64_MAX)
    _unsigned("precision", precision, U32_MAX)
    ratio = _div(_u128((l + a) * precision), l)

    def amount(reserve: int) -> int:
        return _u128(_div(_u128(reserve * ratio), precision) - reserve) & U64_MAX

    return amount(x), amount(y)


def xy_withdraw_amounts_from_l(x: int, y: int, l: int, a: int, precision: int) -> tuple[int, int]:
    """Return the amounts of X and Y released when ``a`` liquidity tokens are burned."""
    for name, value in (("x", x), ("y", y), ("l", l), ("a", a)):
        _unsigned(name, value, U64_MAX)
    _unsigned("precision", precision, U32_MAX)
    if a > l:
        raise CurveError("withdraw amount exceeds liquidity supply")
    ratio = _div(_u128((l - a) * precision), l)

    def amount(reserve: int) -> int:
        return _u128(reserve - _div(_u128(reserve * ratio), precision)) & U64_MAX

    return amount(x), amount(y)


def x2_from_y_swap_amount(x: int, y: int, a: int) -> int:
    """Return the new X balance after ``a`` of Y is swapped in (X2 = K / (Y + a))."""
    k = k_from_xy(x, y)
    _unsigned("a", a, U64_MAX)
    return _div(k, _u128(y + a)) & U64_MAX


def y2_from_x_swap_amount(x: int, y: int, a: int) -> int:
    """Return the new Y balance after ``a`` of X is swapped in (Y2 = K / (X + a))."""
    return x2_from_y_swap_amount(y, x, a)


def delta_x_from_y_swap_amount(x: int, y: int, a: int) -> int:
    """Return the amount of X paid out for ``a`` of Y swapped in."""
    delta = x - x2_from_y_swap_amount(x, y, a)
    if delta < 0:
        raise CurveError()
    return delta


def delta_y_from_x_swap_amount(x: int, y: int, a: int) -> int:
    """Return the amount of Y paid out for ``a`` of X swapped in."""
    return delta_x_from_y_swap_amount(y, x, a)


def delta_x_from_y_swap_amount_with_fee(x: int, y: int, a: int, fee: int) -> tuple[int, int]:
    """Return ``(amount_out, fee_amount)`` of X for ``a`` of Y, fee in basis points."""
    _unsigned("fee", fee, U16_MAX)
    if fee > FEE_DENOMINATOR:
        raise ValueError(f"fee must not exceed {FEE_DENOMINATOR} basis points, got {fee}")
    raw_amount = delta_x_from_y_swap_amount(x, y, a)
    scaled = raw_amount * (FEE_DENOMINATOR - fee)
    if scaled > U64_MAX:
        raise CurveError()
    amount = scaled // FEE_DENOMINATOR
    return amount, raw_amount - amount


def delta_y_from_x_swap_amount_with_fee(x: int, y: int, a: int, fee: int) -> tuple[int, int]:
    """Return ``(amount_out, fee_amount)`` of Y for ``a`` of X, fee in basis points."""
    return delta_x_from_y_swap_amount_with_fee(y, x, a, fee)