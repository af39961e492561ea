from estimator.models.dupa_template import DupaTemplate
from estimator.models.equipment import Equipment
from estimator.models.labor_rate import Designation, LaborRate
from estimator.models.material import Material
from estimator.models.material_price import MaterialPrice
from estimator.models.pay_item import PayItem
from estimator.models.project import Project
from estimator.models.project_boq import ProjectBoq

__all__ = [
    "Designation",
    "DupaTemplate",
    "Equipment",
    "LaborRate",
    "Material",
    "MaterialPrice",
    "PayItem",
    "Project",
    "ProjectBoq",
]
