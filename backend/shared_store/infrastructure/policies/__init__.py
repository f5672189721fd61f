from .collection_policies import StaticCollectionPolicyProvider, YamlCollectionPolicyProvider

__all__ = [
    "StaticCollectionPolicyProvider",
    "YamlCollectionPolicyProvider",
]
