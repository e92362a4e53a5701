"""Single-slot storage for the active diet plan."""

from dataclasses import dataclass

from smartchef.domain.nutrition import DietPlan
from smartchef.services.storage import JsonStore, decode_model

DIET_PLAN_KEY = "smartchef_diet_plan"


@dataclass
class DietPlanStore:
    """Persists at most one diet plan, replaced wholesale on save."""

    kv: JsonStore

    def get(self) -> DietPlan | None:
        """Return the stored plan, if any."""
        return self.kv.read(DIET_PLAN_KEY, decode_model(DietPlan))

    def save(self, plan: DietPlan) -> bool:
        """Replace the stored plan."""
        return self.kv.write(DIET_PLAN_KEY, plan.to_payload())

    def delete(self) -> None:
        """Remove the stored plan."""
        self.kv.remove(DIET_PLAN_KEY)
