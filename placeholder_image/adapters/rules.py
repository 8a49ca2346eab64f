from placeholder_image.rules.models import Rules


class RulesPortAdapter:
    """Exposes validated rules through the intercept RulesPort."""

    def __init__(self, rules: Rules) -> None:
        self.rules = rules

    def get_sentinel_host(self) -> str:
        return self.rules.intercept.sentinel_host

    def get_image_path(self) -> str:
        return self.rules.intercept.image_path

    def get_default_params(self) -> dict[str, str | int]:
        return self.rules.defaults.model_dump()
