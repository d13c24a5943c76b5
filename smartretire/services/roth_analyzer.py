from pydantic import BaseModel

from smartretire.services.calculator import format_amount, round_half_up


class RothConversionResult(BaseModel):
    taxesPaidNow: int
    taxesSavedLater: int
    netBenefit: int
    recommendation: str


def _fmt_bracket(bracket: float) -> str:
    return f"{bracket:g}"


class RothConversionAnalyzer:
    """
    Single-year tax arbitrage: tax owed on the conversion at today's bracket
    against the tax the same dollars would owe at the retirement bracket.

    Growth, time value of money and multi-year bracket filling are not
    modeled; `conversionYear` is recorded but does not enter the math.
    """

    @staticmethod
    def analyze(conversion_amount: float, current_tax_bracket: float, retirement_tax_bracket: float) -> RothConversionResult:
        taxes_paid_now = round_half_up(conversion_amount * (current_tax_bracket / 100))
        taxes_saved_later = round_half_up(conversion_amount * (retirement_tax_bracket / 100))
        net_benefit = taxes_saved_later - taxes_paid_now

        amount = format_amount(conversion_amount)
        if net_benefit > 0:
            recommendation = (
                f"Converting {amount} to a Roth IRA could save you approximately ${net_benefit:,} in taxes "
                f"over your lifetime. This conversion makes sense because your current tax bracket "
                f"({_fmt_bracket(current_tax_bracket)}%) is lower than your expected retirement tax bracket "
                f"({_fmt_bracket(retirement_tax_bracket)}%)."
            )
        else:
            recommendation = (
                f"Converting to a Roth IRA may not be optimal at this time. You would pay ${taxes_paid_now:,} "
                f"in taxes now to save ${taxes_saved_later:,} later, resulting in a net cost of "
                f"${abs(net_benefit):,}. Consider waiting until your tax bracket is lower."
            )

        return RothConversionResult(
            taxesPaidNow=taxes_paid_now,
            taxesSavedLater=taxes_saved_later,
            netBenefit=net_benefit,
            recommendation=recommendation,
        )
