"""Industry benchmark profiles for campaign ROI projections."""

from __future__ import annotations

from dataclasses import dataclass


class UnknownIndustryError(KeyError):
    """Raised when no profile is registered under the requested industry key."""


@dataclass(frozen=True, slots=True)
class ScenarioRates:
    baseline: float
    typical: float
    best_in_class: float

    def for_scenario(self, scenario: str) -> float:
        return getattr(self, scenario)


@dataclass(frozen=True, slots=True)
class Economics:
    ticket: float
    repeats: float
    ltv: float
    margin: float

    @property
    def gross_profit_per_customer(self) -> float:
        return self.ltv * self.margin


@dataclass(frozen=True, slots=True)
class IndustryProfile:
    key: str
    name: str
    response_rate: ScenarioRates
    conversion_rate: ScenarioRates
    economics: Economics
    tips: tuple[str, ...] = ()


INDUSTRY_PROFILES: dict[str, IndustryProfile] = {
    profile.key: profile
    for profile in (
        IndustryProfile(
            key="restaurant",
            name="Restaurant / Food Service / QSR",
            response_rate=ScenarioRates(baseline=0.010, typical=0.022, best_in_class=0.035),
            conversion_rate=ScenarioRates(baseline=0.32, typical=0.45, best_in_class=0.55),
            economics=Economics(ticket=32, repeats=6, ltv=192, margin=0.32),
            tips=(
                'Limited-time offers (e.g., "Valid through [date]") create urgency',
                "Include compelling food photography and specific dollar discount",
                "QR codes to online ordering or digital coupons reduce friction",
                "Multi-touch campaigns (2-3 mailings) dramatically improve response",
            ),
        ),
        IndustryProfile(
            key="home_services",
            name="Home Services (HVAC, Plumbing, Roofing, Landscaping)",
            response_rate=ScenarioRates(baseline=0.010, typical=0.018, best_in_class=0.030),
            conversion_rate=ScenarioRates(baseline=0.30, typical=0.38, best_in_class=0.48),
            economics=Economics(ticket=350, repeats=1.3, ltv=455, margin=0.38),
            tips=(
                "Seasonal timing is critical (AC before summer, furnace before winter)",
                "QR code to online scheduler removes friction and boosts bookings",
                "Include licensing info, insurance, and years in business for trust",
                "Dense, contiguous routes near your service area reduce cost per customer",
            ),
        ),
        IndustryProfile(
            key="retail",
            name="Retail / Local Shop / Boutique",
            response_rate=ScenarioRates(baseline=0.010, typical=0.022, best_in_class=0.035),
            conversion_rate=ScenarioRates(baseline=0.32, typical=0.45, best_in_class=0.55),
            economics=Economics(ticket=55, repeats=3, ltv=165, margin=0.40),
            tips=(
                "Grand opening campaigns with strong offers can achieve 3-4% response",
                'Include specific discount (e.g., "$20 off $50 purchase" vs "Save now")',
                "QR codes to landing pages with digital coupons boost redemption",
                "High-density routes around your location maximize foot traffic",
            ),
        ),
        IndustryProfile(
            key="real_estate",
            name="Real Estate",
            response_rate=ScenarioRates(baseline=0.004, typical=0.010, best_in_class=0.020),
            conversion_rate=ScenarioRates(baseline=0.06, typical=0.10, best_in_class=0.15),
            economics=Economics(ticket=4500, repeats=1, ltv=4500, margin=0.22),
            tips=(
                "Farm neighborhoods consistently (6-12 month strategy for brand awareness)",
                'Focus on "Just Listed" and "Just Sold" postcards for credibility',
                "Include market stats, your recent sales, and professional headshot",
                "Real estate requires frequency - response improves with repeated exposure",
            ),
        ),
        IndustryProfile(
            key="professional_services",
            name="Professional Services (Legal, Financial, Accounting)",
            response_rate=ScenarioRates(baseline=0.006, typical=0.012, best_in_class=0.022),
            conversion_rate=ScenarioRates(baseline=0.22, typical=0.30, best_in_class=0.40),
            economics=Economics(ticket=750, repeats=1, ltv=750, margin=0.48),
            tips=(
                'Focus on specific services (e.g., "Estate Planning" vs "Legal Services")',
                "Include credentials, certifications, and years of experience",
                "Free consultation offers lower barrier and boost response",
                "Professional design reflects your expertise and attention to detail",
            ),
        ),
        IndustryProfile(
            key="healthcare",
            name="Healthcare (Dental, Chiropractic, Med Spa)",
            response_rate=ScenarioRates(baseline=0.008, typical=0.016, best_in_class=0.028),
            conversion_rate=ScenarioRates(baseline=0.30, typical=0.40, best_in_class=0.50),
            economics=Economics(ticket=250, repeats=1.8, ltv=450, margin=0.42),
            tips=(
                'New patient specials perform best (e.g., "$99 New Patient Exam + X-rays")',
                "Include insurance acceptance information prominently",
                "QR codes to online booking systems remove friction",
                "Before/after photos and reviews build trust for cosmetic services",
            ),
        ),
    )
}


def get_profile(key: str) -> IndustryProfile:
    try:
        return INDUSTRY_PROFILES[key]
    except KeyError:
        raise UnknownIndustryError(key) from None
