"""
Reference Tables
================

Raw regulatory reference data in its published (camelCase) shape.
Validated into immutable models by `reference.dataset`.

Version: 0.1.0
"""

from typing import Any


DATASET_VERSION = "2024.1"


CENTRAL_RULES: dict[str, dict[str, Any]] = {
    "GST": {
        "id": "GST",
        "name": "Goods and Services Tax",
        "category": "taxation",
        "mandatory": True,
        "applicableIf": {"annualTurnover": {"greaterThanOrEqual": 4_000_000}},
        "documents": ["PAN Card", "Aadhaar Card", "Bank Statement", "Business Registration"],
        "authority": "GST Council",
        "validity": "Permanent",
        "cost": 0,
        "timeline": "7-15 days",
        "penalties": {
            "lateRegistration": "10% of tax liability or ₹10,000 whichever is higher",
            "nonCompliance": "₹10,000 per return",
        },
    },
    "FSSAI": {
        "id": "FSSAI",
        "name": "Food Safety and Standards Authority License",
        "category": "food_safety",
        "mandatory": True,
        "applicableIf": {"businessType": ["restaurant", "cafe", "food", "catering"]},
        "documents": ["Form A", "ID Proof", "Address Proof", "NOC from Municipality"],
        "authority": "Food Safety and Standards Authority of India",
        "validity": "1-5 years",
        "cost": {"basic": 100, "state": 2000, "central": 7500},
        "timeline": "7-60 days",
        "penalties": {"operatingWithoutLicense": "₹25,000 to ₹5,00,000"},
    },
    "MSME_UDYAM": {
        "id": "MSME_UDYAM",
        "name": "Udyam Registration",
        "category": "business_registration",
        "mandatory": False,
        "benefits": ["Priority sector lending", "Collateral-free loans", "Government tenders"],
        "documents": ["Aadhaar Card", "PAN Card"],
        "authority": "Ministry of MSME",
        "validity": "Permanent",
        "cost": 0,
        "timeline": "1 day",
    },
    "EPF": {
        "id": "EPF",
        "name": "Employee Provident Fund",
        "category": "labor",
        "mandatory": True,
        "applicableIf": {"employees": {"greaterThanOrEqual": 20}},
        "documents": ["Form 1", "Salary Register", "Employee Details"],
        "authority": "Employees' Provident Fund Organisation",
        "validity": "Ongoing",
        "cost": 0,
        "timeline": "30 days",
    },
    "ESI": {
        "id": "ESI",
        "name": "Employee State Insurance",
        "category": "labor",
        "mandatory": True,
        "applicableIf": {"employees": {"greaterThanOrEqual": 10}},
        "documents": ["Form 1", "Employee Details", "Salary Register"],
        "authority": "Employees' State Insurance Corporation",
        "validity": "Ongoing",
        "cost": 0,
        "timeline": "30 days",
    },
    "PROFESSIONAL_TAX": {
        "id": "PROFESSIONAL_TAX",
        "name": "Professional Tax",
        "category": "taxation",
        "mandatory": True,
        "applicableIf": {"employees": {"greaterThan": 0}},
        "authority": "State Government",
        "validity": "Annual",
        "cost": "Varies by state",
    },
}


STATE_RULES: dict[str, dict[str, dict[str, Any]]] = {
    "KA": {
        "SHOPS_ACT": {
            "id": "KA_SHOPS_ACT",
            "name": "Karnataka Shops and Commercial Establishments Act",
            "category": "business_registration",
            "mandatory": True,
            "applicableIf": {"businessType": ["retail", "office", "commercial"]},
            "documents": ["Application Form", "Rent Agreement", "ID Proof"],
            "authority": "Labour Department, Karnataka",
            "validity": "Annual",
            "cost": 500,
            "timeline": "15 days",
        },
        "FACTORIES_ACT": {
            "id": "KA_FACTORIES_ACT",
            "name": "Karnataka Factories Act",
            "category": "manufacturing",
            "mandatory": True,
            "applicableIf": {
                "businessType": ["manufacturing"],
                "employees": {"greaterThanOrEqual": 10},
            },
            "documents": ["Factory Plan", "NOC from Fire Department", "Pollution Clearance"],
            "authority": "Directorate of Factories and Boilers",
            "validity": "Annual",
            "cost": 2000,
            "timeline": "30-45 days",
        },
        "TRADE_LICENSE": {
            "id": "KA_TRADE_LICENSE",
            "name": "Trade License",
            "category": "local_permit",
            "mandatory": True,
            "authority": "BBMP/Local Municipality",
            "validity": "Annual",
            "cost": 1000,
            "timeline": "15-30 days",
        },
    },
    "MH": {
        "SHOPS_ACT": {
            "id": "MH_SHOPS_ACT",
            "name": "Maharashtra Shops and Establishments Act",
            "category": "business_registration",
            "mandatory": True,
            "authority": "Labour Department, Maharashtra",
            "validity": "Annual",
            "cost": 200,
            "timeline": "7-15 days",
        },
    },
    "DL": {
        "SHOPS_ACT": {
            "id": "DL_SHOPS_ACT",
            "name": "Delhi Shops and Establishments Act",
            "category": "business_registration",
            "mandatory": True,
            "authority": "Labour Department, Delhi",
            "validity": "Annual",
            "cost": 300,
            "timeline": "7-10 days",
        },
    },
    "GJ": {
        "SHOPS_ACT": {
            "id": "GJ_SHOPS_ACT",
            "name": "Gujarat Shops and Establishments Act",
            "category": "business_registration",
            "mandatory": True,
            "authority": "Labour Department, Gujarat",
            "validity": "Annual",
            "cost": 400,
            "timeline": "10-15 days",
        },
    },
    "TN": {
        "SHOPS_ACT": {
            "id": "TN_SHOPS_ACT",
            "name": "Tamil Nadu Shops and Establishments Act",
            "category": "business_registration",
            "mandatory": True,
            "authority": "Labour Department, Tamil Nadu",
            "validity": "Annual",
            "cost": 250,
            "timeline": "15-20 days",
        },
    },
}


BUSINESS_TYPE_RULES: dict[str, dict[str, list[str]]] = {
    "restaurant": {
        "required": ["FSSAI", "FIRE_NOC", "POLLUTION_NOC", "MUSIC_LICENSE"],
        "conditional": ["LIQUOR_LICENSE", "OUTDOOR_SEATING_PERMIT"],
    },
    "cafe": {
        "required": ["FSSAI", "FIRE_NOC"],
        "conditional": ["MUSIC_LICENSE", "OUTDOOR_SEATING_PERMIT"],
    },
    "manufacturing": {
        "required": ["FACTORIES_ACT", "POLLUTION_CLEARANCE", "FIRE_NOC"],
        "conditional": ["BOILER_LICENSE", "HAZARDOUS_WASTE_PERMIT"],
    },
    "it_services": {
        "required": ["SHOPS_ACT"],
        "conditional": ["SEZ_REGISTRATION", "STPI_REGISTRATION"],
    },
    "retail": {
        "required": ["SHOPS_ACT", "TRADE_LICENSE"],
        "conditional": ["WEIGHT_MEASURE_LICENSE"],
    },
}


PLATFORM_RULES: dict[str, dict[str, Any]] = {
    "swiggy": {
        "name": "Swiggy",
        "type": "food_delivery",
        "mandatory": ["FSSAI", "GST", "BANK_ACCOUNT"],
        "documents": ["Menu", "Restaurant Photos", "Owner ID"],
        "commission": "15-25%",
        "timeline": "3-7 days",
    },
    "zomato": {
        "name": "Zomato",
        "type": "food_delivery",
        "mandatory": ["FSSAI", "BANK_ACCOUNT"],
        "optional": ["GST"],
        "documents": ["Menu", "Restaurant Photos", "Owner ID"],
        "commission": "18-23%",
        "timeline": "2-5 days",
    },
    "amazon": {
        "name": "Amazon",
        "type": "ecommerce",
        "mandatory": ["GST", "BANK_ACCOUNT", "PAN"],
        "documents": ["Product Catalog", "Brand Authorization"],
        "commission": "5-20%",
        "timeline": "7-15 days",
    },
    "flipkart": {
        "name": "Flipkart",
        "type": "ecommerce",
        "mandatory": ["GST", "BANK_ACCOUNT", "PAN"],
        "documents": ["GST Certificate", "PAN Card", "Product Images"],
        "commission": "5-15%",
        "timeline": "10-15 days",
    },
}


# Lowercased state names and major cities -> 2-letter state code
STATE_DIRECTORY: dict[str, str] = {
    "andhra pradesh": "AP",
    "assam": "AS",
    "bihar": "BR",
    "chhattisgarh": "CT",
    "goa": "GA",
    "gujarat": "GJ",
    "haryana": "HR",
    "himachal pradesh": "HP",
    "jharkhand": "JH",
    "karnataka": "KA",
    "kerala": "KL",
    "madhya pradesh": "MP",
    "maharashtra": "MH",
    "manipur": "MN",
    "meghalaya": "ML",
    "mizoram": "MZ",
    "nagaland": "NL",
    "odisha": "OD",
    "punjab": "PB",
    "rajasthan": "RJ",
    "sikkim": "SK",
    "tamil nadu": "TN",
    "telangana": "TS",
    "tripura": "TR",
    "uttar pradesh": "UP",
    "uttarakhand": "UK",
    "west bengal": "WB",
    "delhi": "DL",
    "mumbai": "MH",
    "bangalore": "KA",
    "chennai": "TN",
    "hyderabad": "TS",
    "pune": "MH",
    "kolkata": "WB",
    "patna": "BR",
}
