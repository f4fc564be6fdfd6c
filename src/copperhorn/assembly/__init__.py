from copperhorn.assembly.factory import OrganismFactory

__all__ = ['OrganismFactory']
