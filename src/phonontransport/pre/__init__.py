from phonontransport.pre.material import Material, TabulatedMaterial, Table, load_materials, get_material

__all__ = ["Material", "TabulatedMaterial", "Table", "load_materials", "get_material"]
