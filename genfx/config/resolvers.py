import hydra
from omegaconf import OmegaConf

from genfx.evolution.strategies.replacement import PopulationReplacementValue


def _replacement_resolver(raw):
    """``${replacement:25%}`` -> ``{value: 25, kind: percentage}``; ``${replacement:4}`` -> fixed count."""
    return PopulationReplacementValue.parse(raw).model_dump(mode="json")


def register_resolvers() -> None:
    OmegaConf.register_new_resolver(
        "get_object", lambda obj: hydra.utils.get_object(obj), replace=True
    )
    OmegaConf.register_new_resolver("len", lambda arr: len(arr), replace=True)
    OmegaConf.register_new_resolver("replacement", _replacement_resolver, replace=True)
