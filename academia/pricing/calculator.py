"""
Precificação de cursos no checkout.

Fonte única do preço mostrado ao comprador e do valor cobrado no processador:

- `compute_final_price(preço, desconto %, ganho mínimo)` devolve o preço final
  em unidades maiores (ex.: pesos), já arredondado a 2 casas.
- `to_minor_units(preço final)` converte para centavos inteiros.

Arredondamento: ROUND_HALF_UP em ambos os passos. Como o preço final já sai
quantizado em 0.01, a conversão para centavos é exata e nunca diverge do valor
exibido.

Nada aqui conhece banco, HTTP ou o processador de pagamentos.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Optional, Union

from academia.core.errors import InvalidDiscount, InvalidInput

Number = Union[int, float, str, Decimal]

CENTS = Decimal("0.01")
ZERO = Decimal("0.00")
HUNDRED = Decimal(100)


def _d(value: Number, field: str) -> Decimal:
    if isinstance(value, bool):
        raise InvalidInput(f"{field} inválido: {value!r}")
    try:
        d = value if isinstance(value, Decimal) else Decimal(str(value))
    except (InvalidOperation, ValueError, TypeError):
        raise InvalidInput(f"{field} inválido: {value!r}")
    if not d.is_finite():
        raise InvalidInput(f"{field} inválido: {value!r}")
    if d < 0:
        raise InvalidInput(f"{field} não pode ser negativo")
    return d


def _optional(value: Optional[Number], field: str) -> Optional[Decimal]:
    if value is None or value == "":
        return None
    return _d(value, field)


def round_money(value: Decimal) -> Decimal:
    return value.quantize(CENTS, rounding=ROUND_HALF_UP)


def compute_final_price(
    original_amount: Number,
    discount_percentage: Optional[Number] = None,
    minimum_gain: Optional[Number] = None,
) -> Decimal:
    """
    Preço final de um curso.

    - curso gratuito (preço <= 0) -> 0, sem aplicar desconto;
    - desconto ausente ou <= 0 -> preço original;
    - desconto >= 100 -> InvalidDiscount (nunca zera o preço em silêncio);
    - se o preço com desconto ficar abaixo do ganho mínimo, vale o ganho
      mínimo, limitado ao preço original.
    """
    price = _d(original_amount, "original_amount")
    pct = _optional(discount_percentage, "discount_percentage")
    floor = _optional(minimum_gain, "minimum_gain")

    if price <= 0:
        return ZERO

    if pct is not None and pct >= HUNDRED:
        raise InvalidDiscount(f"Desconto inválido: {pct}% (deve ser menor que 100%)")

    if pct is None or pct <= 0:
        return round_money(price)

    candidate = price * (1 - pct / HUNDRED)
    if floor is not None and candidate < floor:
        final = min(floor, price)
    else:
        final = candidate
    return round_money(final)


def to_minor_units(final_amount: Number) -> int:
    """Centavos inteiros de um valor em unidades maiores (HALF_UP)."""
    amount = _d(final_amount, "final_amount")
    return int((amount * HUNDRED).to_integral_value(rounding=ROUND_HALF_UP))


def from_minor_units(amount_minor_units: int) -> Decimal:
    return round_money(Decimal(int(amount_minor_units)) / HUNDRED)


def discount_recommendation(original_amount: Number) -> Optional[str]:
    price = _d(original_amount, "original_amount")
    if price <= 0:
        return None
    if price < 20:
        return "Para preços baixos, recomenda-se 10-20% de desconto"
    if price < 50:
        return "Para preços médios, recomenda-se 20-40% de desconto"
    return "Para preços altos, recomenda-se 30-60% de desconto"


@dataclass(frozen=True, slots=True)
class PriceBreakdown:
    original_amount: Decimal
    discount_percentage: Optional[Decimal]
    minimum_gain: Optional[Decimal]
    final_amount: Decimal
    amount_minor_units: int

    @property
    def has_discount(self) -> bool:
        return self.final_amount < self.original_amount

    @property
    def lost_gain(self) -> Decimal:
        # "ganancia perdida": quanto o vendedor deixa de receber com o desconto
        return round_money(self.original_amount - self.final_amount)


def price_breakdown(
    original_amount: Number,
    discount_percentage: Optional[Number] = None,
    minimum_gain: Optional[Number] = None,
) -> PriceBreakdown:
    final = compute_final_price(original_amount, discount_percentage, minimum_gain)
    return PriceBreakdown(
        original_amount=round_money(_d(original_amount, "original_amount")),
        discount_percentage=_optional(discount_percentage, "discount_percentage"),
        minimum_gain=_optional(minimum_gain, "minimum_gain"),
        final_amount=final,
        amount_minor_units=to_minor_units(final),
    )
