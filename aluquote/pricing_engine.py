"""
Pricing Engine.

Turns an estimate input into costs and a quotation.
Pure math. Weight × rate × finish, then margin, discount and GST.

Input: EstimateInput (+ MaterialRates), QuotationCharges
Output: EstimateResult, Quotation
"""

from .calculators.window_weight import WindowWeightCalculator
from .rates import DEFAULT_RATES, MaterialRates, finish_factor
from .schemas import EstimateInput, EstimateResult, Quotation, QuotationCharges


class PricingEngine:
    """
    Runs the estimate pipeline:
    dimensions -> weights -> cost -> margin/discount -> quotation.

    No rounding happens here. Two-decimal formatting is a display concern.
    """

    def __init__(self, rates: MaterialRates = DEFAULT_RATES):
        self.weights = WindowWeightCalculator(rates)

    def estimate(self, estimate_input: EstimateInput) -> EstimateResult:
        weights = self.weights.calculate(estimate_input)

        estimated_cost = self.estimated_cost(
            weights["total_weight_kg"], estimate_input.cost_per_kg, estimate_input.finish,
        )
        final_cost = self.apply_margin_and_discount(
            estimated_cost, estimate_input.profit_margin_pct, estimate_input.discount_pct,
        )
        return EstimateResult(
            **weights,
            estimated_cost=estimated_cost,
            final_cost=final_cost,
        )

    def estimated_cost(self, total_weight_kg: float, cost_per_kg: float, finish) -> float:
        """Weight × rate × finish surcharge."""
        return total_weight_kg * cost_per_kg * finish_factor(finish)

    def apply_margin_and_discount(self, estimated_cost: float,
                                  profit_margin_pct: float, discount_pct: float) -> float:
        """
        Margin is applied first, then the discount. Percentages are not
        clamped: a discount over 100% gives a negative cost.
        """
        with_margin = estimated_cost * (1 + profit_margin_pct / 100.0)
        return with_margin * (1 - discount_pct / 100.0)

    def quotation(self, result: EstimateResult, charges: QuotationCharges) -> Quotation:
        subtotal = result.final_cost + charges.delivery_charge + charges.labor_charge
        tax_amount = subtotal * (charges.gst_percent / 100.0)
        return Quotation(
            subtotal=subtotal,
            tax_amount=tax_amount,
            grand_total=subtotal + tax_amount,
        )


def compute_estimate(estimate_input: EstimateInput,
                     rates: MaterialRates = DEFAULT_RATES) -> EstimateResult:
    return PricingEngine(rates).estimate(estimate_input)


def compute_quotation(result: EstimateResult, charges: QuotationCharges = None) -> Quotation:
    return PricingEngine().quotation(result, charges or QuotationCharges())
