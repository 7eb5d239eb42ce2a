"""Feature type name resolution."""

from mapindex.models.feature import Feature


def get_feature_type_name(feature: Feature) -> str | None:
    """Get the unqualified feature type name from a feature id.

    Args:
        feature: Feature with an id like 'roads.42'

    Returns:
        Type name ('roads'), or None if the id carries none
    """
    feature_id = feature.id
    if not isinstance(feature_id, str):
        return None

    if feature_id.find(".") > 0:
        return feature_id.split(".")[0]
    return None
