"""
Department reference data.

Ids are stable slugs referenced by the inventory registry, so they must not
change once deployed.
"""
from dataclasses import asdict, dataclass
from typing import Dict, Optional


@dataclass(frozen=True)
class DepartmentSeed:
    id: str
    name: str
    location: str
    description: Optional[str] = None
    focal_person: Optional[str] = None
    designation: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    logo: Optional[str] = None

    def as_row(self) -> dict:
        return asdict(self)


DEPARTMENT_SEEDS = (
    DepartmentSeed(
        id="arc",
        name="Adaptive Research Center",
        location="Govt. Agri. Station Multan",
        description="Monthly vacancy position for the Office of Assistant Director Agriculture (Farm) at the Adaptive Research Center.",
        focal_person="Office of Assistant Director Agriculture (Farm)",
        designation="Govt. Agri. Station Multan",
    ),
    DepartmentSeed(
        id="agri-eng",
        name="Agriculture Engineering",
        location="Multan, Pakistan",
        description="Land development, water conservation and farm mechanization for the Multan region.",
        focal_person="Mr. Muhammad Abdul Haye Faisal",
        designation="Director Agricultural (Technical) Multan",
        phone="0334-7456723",
        email="daemultan@yahoo.com",
    ),
    DepartmentSeed(
        id="agri-ext",
        name="Agricultural Extension Wing",
        location="Multan",
        description="Extension services, farmer training and demonstration facilities.",
        focal_person="Deputy Director Agriculture (Ext)",
        email="ext@agripunjab.gov.pk",
    ),
    DepartmentSeed(
        id="agronomy",
        name="Agronomy Department",
        location="MNS University of Agriculture, Multan",
        description="Crop production, soil management and sustainable farming practices for improved agricultural productivity.",
        focal_person="Dr. Nabeel Ahmad Ikram",
        designation="Assistant Professor",
        phone="+92-61-9210072",
        email="nabeel.ahmad@mnsuam.edu.pk",
    ),
    DepartmentSeed(
        id="amri",
        name="Agricultural Mechanization Research Institute",
        location="Multan",
        description="Farm machinery, mechanization technologies and agricultural engineering for modern farming.",
        focal_person="Mr Ghulam Hussain",
        designation="Director (T&T)",
        phone="061-9200786",
    ),
    DepartmentSeed(
        id="cri",
        name="Cotton Research Institute",
        location="Old Shujabad Road Multan",
        description="Cotton cultivation, variety development, pest management and fiber quality improvement.",
        focal_person="Dr. Muhammad Tauseef",
        designation="Senior Scientist (Agronomy)",
        phone="+923340072357",
        email="dircrimm@gmail.com",
    ),
    DepartmentSeed(
        id="erss",
        name="Entomological Research Sub Station Multan",
        location="Multan, Punjab",
        description="Insect pests, beneficial insects and integrated pest management strategies.",
        focal_person="Dr. Asifa Hameed",
        designation="Principal Scientist",
        phone="+92-61-9210075",
        email="asifa_hameed_sheikh@yahoo.com",
    ),
    DepartmentSeed(
        id="flori",
        name="Floriculture Research Institute",
        location="Multan, Punjab",
        description="Ornamental plants, landscaping and floriculture production techniques.",
        focal_person="Dr. Muhammad Muzamil Ijaz",
        designation="Assistant Research Officer",
        phone="03016984364",
        email="muzamil.ijaz243@gmail.com",
    ),
    DepartmentSeed(
        id="food-science",
        name="Food Science and Technology",
        location="MNS University of Agriculture, Multan",
        description="Food safety, nutrition and processing technologies from production to consumption.",
        focal_person="Dr. Shabbir Ahmad",
        designation="Professor & Head",
        phone="+92-61-9210071",
        email="shabbir.ahmad@mnsuam.edu.pk",
    ),
    DepartmentSeed(
        id="mnsuam",
        name="MNS University of Agriculture",
        location="Old Shujabad Road, Multan",
        description="University estate: academic blocks, halls, hostels and farms.",
        focal_person="Dr. Mahmood Alam",
        designation="Directorate of University Farms",
        phone="+92-61-9210071",
        email="mahmood.alam@mnsuam.edu.pk",
    ),
    DepartmentSeed(
        id="mri",
        name="Mango Research Institute",
        location="Multan, Punjab",
        description="Mango cultivation, variety development, post-harvest technologies and quality improvement.",
        focal_person="Mr. Abid Hameed Khan",
        designation="Scientific Officer- Entomology",
        phone="0300-6326987",
        email="abidhameedkhan@yahoo.com",
    ),
    DepartmentSeed(
        id="pest",
        name="Pesticide Quality Control Laboratory",
        location="Multan, Punjab",
        description="Quality control testing of pesticide formulations sold in the region.",
        focal_person="Dr Subhan Danish",
        designation="Senior Scientist",
        phone="0304-7996951",
        email="sd96850@gmail.com",
    ),
    DepartmentSeed(
        id="raedc",
        name="RAEDC",
        location="Vehari",
        description="Regional Agricultural Economic Development Center: training halls, hostels and demonstration facilities.",
        focal_person="Director, RAEDC",
        email="raedc@agripunjab.gov.pk",
    ),
    DepartmentSeed(
        id="rari",
        name="Regional Agricultural Research Institute",
        location="Bahawalpur, Punjab",
        description="Crop research and farm machinery for the Bahawalpur region.",
        focal_person="RASHID MINHAS",
        designation="PRINCIPAL SCIENTIST",
    ),
    DepartmentSeed(
        id="soil-water",
        name="Soil & Water Testing Laboratory",
        location="Multan, Punjab",
        description="Soil and water analysis services for agricultural research and farmer support.",
        focal_person="Ms. Fatima Bibi",
        designation="Principal Scientist",
    ),
    DepartmentSeed(
        id="horticulture",
        name="Horticulture",
        location="MNS University of Agriculture, Multan",
        description="Fruit and vegetable production, nursery management and post-harvest handling.",
        focal_person="Dr. Rashid Ali",
        designation="Professor",
        phone="+92-61-9210078",
        email="rashid.ali@mnsuam.edu.pk",
    ),
    DepartmentSeed(
        id="pbg",
        name="Plant Breeding and Genetics",
        location="MNS University of Agriculture, Multan",
        description="Crop improvement through breeding and genetic research.",
        focal_person="Dr. Saeed Ahmad",
        designation="Professor & Head",
        phone="+92-61-9210079",
        email="saeed.ahmad@mnsuam.edu.pk",
    ),
    DepartmentSeed(
        id="plant-pathology",
        name="Plant Pathology",
        location="MNS University of Agriculture, Multan",
        description="Plant disease diagnosis and management.",
        focal_person="Dr. Iftikhar Ahmad",
        designation="Professor",
        phone="+92-61-9210080",
        email="iftikhar.ahmad@mnsuam.edu.pk",
    ),
)

SEEDS_BY_ID: Dict[str, DepartmentSeed] = {seed.id: seed for seed in DEPARTMENT_SEEDS}

FOOD_SCIENCE_DEPARTMENT_NAME = "Food Science and Technology"
FOOD_SCIENCE_FOCAL_PERSON = "Dr. Shabbir Ahmad"

# (name, type and lab section) of the demo food analysis lab
FOOD_SCIENCE_SAMPLE_EQUIPMENT = (
    ("Kjeldahl Apparatus (Digestion and Distillation)", "Analysis"),
    ("Water Activity meter", "Analysis"),
    ("Soxhlet Apparatus", "Analysis"),
    ("Analytical Weighing Balance", "Measurement"),
    ("Autoclave", "Sterilization"),
    ("Texture Analyser", "Analysis"),
    ("Freeze Dryer", "Processing"),
    ("Pulse Electric Field", "Processing"),
    ("Ozonation chamber", "Processing"),
    ("Pasteurizer", "Processing"),
    ("Fermenter", "Processing"),
)
