"""
Constants for TCM Structured Notes

This module defines the static, read-only lookup tables used by the
pipeline. Constants are:
    1. Centralized for easy modification
    2. Type-hinted for IDE support
    3. Never mutated at runtime (safe to share across concurrent calls)

Constant Categories:
    CHANNEL_REGION_RANGES → Per-channel point-number ranges → region
    CHANNEL_ALIASES       → Alternative channel abbreviations
    EXTRA_POINTS          → Named points outside the channel system
    ICD10_SYMPTOM_CODES   → Symptom phrase → ICD-10 whitelist
    TCM_REVIEW_CATEGORIES → TCM review-of-systems categories
    SECTION_LABELS        → Section headers recognized in clinical notes

Author: Shubham Singh
Date: December 2025
"""

from typing import Dict, List, Tuple

from tcm_structured_notes.core.enums import RegionName


# =============================================================================
# STAGE 1: CHANNEL REGION RANGES
# =============================================================================
# Each channel maps to ordered, inclusive (start, end, region) triples that
# cover every point number from 1 to the channel's last point with no gaps
# and no overlaps.

CHANNEL_REGION_RANGES: Dict[str, List[Tuple[int, int, RegionName]]] = {
    # -------------------------------------------------------------------------
    # 1.1 Arm Channels
    # -------------------------------------------------------------------------
    "LU": [
        (1, 2, RegionName.CHEST),
        (3, 4, RegionName.UPPER_ARM),
        (5, 9, RegionName.FOREARM),
        (10, 11, RegionName.HAND),
    ],
    "LI": [
        (1, 5, RegionName.HAND),
        (6, 11, RegionName.FOREARM),
        (12, 15, RegionName.UPPER_ARM),
        (16, 16, RegionName.BACK),
        (17, 18, RegionName.NECK),
        (19, 20, RegionName.FACE),
    ],
    "HT": [
        (1, 2, RegionName.UPPER_ARM),
        (3, 7, RegionName.FOREARM),
        (8, 9, RegionName.HAND),
    ],
    "SI": [
        (1, 4, RegionName.HAND),
        (5, 8, RegionName.FOREARM),
        (9, 10, RegionName.UPPER_ARM),
        (11, 15, RegionName.SHOULDER),
        (16, 17, RegionName.NECK),
        (18, 19, RegionName.FACE),
    ],
    "PC": [
        (1, 1, RegionName.CHEST),
        (2, 2, RegionName.UPPER_ARM),
        (3, 7, RegionName.FOREARM),
        (8, 9, RegionName.HAND),
    ],
    "SJ": [
        (1, 4, RegionName.HAND),
        (5, 9, RegionName.FOREARM),
        (10, 13, RegionName.UPPER_ARM),
        (14, 15, RegionName.SHOULDER),
        (16, 16, RegionName.NECK),
        (17, 20, RegionName.HEAD),
        (21, 23, RegionName.FACE),
    ],
    # -------------------------------------------------------------------------
    # 1.2 Leg Channels
    # -------------------------------------------------------------------------
    "ST": [
        (1, 8, RegionName.FACE),
        (9, 12, RegionName.NECK),
        (13, 18, RegionName.CHEST),
        (19, 30, RegionName.ABDOMEN),
        (31, 34, RegionName.THIGH),
        (35, 40, RegionName.LOWER_LEG),
        (41, 45, RegionName.FOOT),
    ],
    "SP": [
        (1, 5, RegionName.FOOT),
        (6, 9, RegionName.LOWER_LEG),
        (10, 11, RegionName.THIGH),
        (12, 12, RegionName.HIP),
        (13, 16, RegionName.ABDOMEN),
        (17, 21, RegionName.CHEST),
    ],
    "BL": [
        (1, 2, RegionName.FACE),
        (3, 9, RegionName.HEAD),
        (10, 10, RegionName.NECK),
        (11, 25, RegionName.BACK),
        (26, 35, RegionName.HIP),
        (36, 40, RegionName.THIGH),
        (41, 52, RegionName.BACK),
        (53, 54, RegionName.HIP),
        (55, 59, RegionName.LOWER_LEG),
        (60, 67, RegionName.FOOT),
    ],
    "KD": [
        (1, 6, RegionName.FOOT),
        (7, 10, RegionName.LOWER_LEG),
        (11, 11, RegionName.HIP),
        (12, 21, RegionName.ABDOMEN),
        (22, 27, RegionName.CHEST),
    ],
    "GB": [
        (1, 7, RegionName.FACE),
        (8, 13, RegionName.HEAD),
        (14, 14, RegionName.FACE),
        (15, 20, RegionName.HEAD),
        (21, 21, RegionName.SHOULDER),
        (22, 23, RegionName.CHEST),
        (24, 26, RegionName.ABDOMEN),
        (27, 30, RegionName.HIP),
        (31, 33, RegionName.THIGH),
        (34, 39, RegionName.LOWER_LEG),
        (40, 44, RegionName.FOOT),
    ],
    "LV": [
        (1, 4, RegionName.FOOT),
        (5, 8, RegionName.LOWER_LEG),
        (9, 12, RegionName.THIGH),
        (13, 14, RegionName.ABDOMEN),
    ],
    # -------------------------------------------------------------------------
    # 1.3 Extraordinary Vessels (midline)
    # -------------------------------------------------------------------------
    "REN": [
        (1, 2, RegionName.HIP),
        (3, 16, RegionName.ABDOMEN),
        (17, 22, RegionName.CHEST),
        (23, 23, RegionName.NECK),
        (24, 24, RegionName.FACE),
    ],
    "DU": [
        (1, 2, RegionName.HIP),
        (3, 14, RegionName.BACK),
        (15, 16, RegionName.NECK),
        (17, 24, RegionName.HEAD),
        (25, 28, RegionName.FACE),
    ],
}


# =============================================================================
# STAGE 2: CHANNEL ALIASES
# =============================================================================
# Alternative abbreviations found in clinical notes, mapped onto the keys
# of CHANNEL_REGION_RANGES.

CHANNEL_ALIASES: Dict[str, str] = {
    "KI": "KD",
    "K": "KD",
    "LR": "LV",
    "LIV": "LV",
    "TE": "SJ",
    "TB": "SJ",
    "TW": "SJ",
    "HE": "HT",
    "H": "HT",
    "P": "PC",
    "UB": "BL",
    "B": "BL",
    "CV": "REN",
    "GV": "DU",
}


# =============================================================================
# STAGE 3: EXTRA POINTS
# =============================================================================
# Named points with no channel/number form. Keys are normalized the same way
# the classifier normalizes input: uppercase with all whitespace removed.

EXTRA_POINTS: Dict[str, RegionName] = {
    # -------------------------------------------------------------------------
    # 3.1 Head and Neck
    # -------------------------------------------------------------------------
    "YINTANG": RegionName.HEAD,
    "TAIYANG": RegionName.HEAD,
    "SISHENCONG": RegionName.HEAD,
    "YUYAO": RegionName.HEAD,
    "BITONG": RegionName.FACE,
    "ANMIAN": RegionName.NECK,
    "BAILAO": RegionName.NECK,
    "DINGCHUAN": RegionName.BACK,
    # -------------------------------------------------------------------------
    # 3.2 Trunk
    # -------------------------------------------------------------------------
    "QIMEN": RegionName.CHEST,
    "HUATUOJIAJI": RegionName.BACK,
    "YAOYAN": RegionName.BACK,
    "ZIGONG": RegionName.ABDOMEN,
    # -------------------------------------------------------------------------
    # 3.3 Limbs (includes Master Tung points in common use)
    # -------------------------------------------------------------------------
    "LINGGU": RegionName.HAND,
    "DABAI": RegionName.HAND,
    "SHIXUAN": RegionName.HAND,
    "BAXIE": RegionName.HAND,
    "JIANQIAN": RegionName.SHOULDER,
    "XIYAN": RegionName.LOWER_LEG,
    "DANNANG": RegionName.LOWER_LEG,
    "LANWEI": RegionName.LOWER_LEG,
    "BAFENG": RegionName.FOOT,
}


# =============================================================================
# STAGE 4: ICD-10 SYMPTOM WHITELIST
# =============================================================================
# Symptom-level ("unspecified") ICD-10-CM codes only, never disease
# diagnoses. Keys are lowercase symptom phrases. Codes are written with the
# decimal point and full subcode, keeping a trailing "0" where ICD-10-CM
# defines an unspecified fifth character (M54.50, not M54.5).

ICD10_SYMPTOM_CODES: Dict[str, Tuple[str, str]] = {
    # -------------------------------------------------------------------------
    # 4.1 Musculoskeletal Pain
    # -------------------------------------------------------------------------
    "low back pain": ("M54.50", "Low back pain, unspecified"),
    "lower back pain": ("M54.50", "Low back pain, unspecified"),
    "lumbago": ("M54.50", "Low back pain, unspecified"),
    "back pain": ("M54.9", "Dorsalgia, unspecified"),
    "upper back pain": ("M54.9", "Dorsalgia, unspecified"),
    "neck pain": ("M54.2", "Cervicalgia"),
    "sciatica": ("M54.30", "Sciatica, unspecified side"),
    "shoulder pain": ("M25.519", "Pain in unspecified shoulder"),
    "elbow pain": ("M25.529", "Pain in unspecified elbow"),
    "wrist pain": ("M25.539", "Pain in unspecified wrist"),
    "hip pain": ("M25.559", "Pain in unspecified hip"),
    "knee pain": ("M25.569", "Pain in unspecified knee"),
    "joint pain": ("M25.50", "Pain in unspecified joint"),
    "hand pain": ("M79.643", "Pain in unspecified hand"),
    "foot pain": ("M79.673", "Pain in unspecified foot"),
    "muscle pain": ("M79.10", "Myalgia, unspecified site"),
    "jaw pain": ("R68.84", "Jaw pain"),
    "chronic pain": ("G89.29", "Other chronic pain"),
    # -------------------------------------------------------------------------
    # 4.2 Head and Neurological
    # -------------------------------------------------------------------------
    "headache": ("R51.9", "Headache, unspecified"),
    "headaches": ("R51.9", "Headache, unspecified"),
    "dizziness": ("R42", "Dizziness and giddiness"),
    "vertigo": ("R42", "Dizziness and giddiness"),
    "numbness": ("R20.0", "Anesthesia of skin"),
    "tingling": ("R20.2", "Paresthesia of skin"),
    "tinnitus": ("H93.19", "Tinnitus, unspecified ear"),
    # -------------------------------------------------------------------------
    # 4.3 Sleep, Energy and Emotional
    # -------------------------------------------------------------------------
    "insomnia": ("G47.00", "Insomnia, unspecified"),
    "fatigue": ("R53.83", "Other fatigue"),
    "anxiety": ("F41.9", "Anxiety disorder, unspecified"),
    "irritability": ("R45.4", "Irritability and anger"),
    "stress": ("Z73.3", "Stress, not elsewhere classified"),
    # -------------------------------------------------------------------------
    # 4.4 Digestive
    # -------------------------------------------------------------------------
    "nausea": ("R11.0", "Nausea"),
    "bloating": ("R14.0", "Abdominal distension (gaseous)"),
    "abdominal distension": ("R14.0", "Abdominal distension (gaseous)"),
    "abdominal pain": ("R10.9", "Unspecified abdominal pain"),
    "diarrhea": ("R19.7", "Diarrhea, unspecified"),
    "loose stools": ("R19.7", "Diarrhea, unspecified"),
    "constipation": ("K59.00", "Constipation, unspecified"),
    "heartburn": ("R12", "Heartburn"),
    "acid reflux": ("R12", "Heartburn"),
    "poor appetite": ("R63.0", "Anorexia"),
    "loss of appetite": ("R63.0", "Anorexia"),
    # -------------------------------------------------------------------------
    # 4.5 Cardiopulmonary and General
    # -------------------------------------------------------------------------
    "chest pain": ("R07.9", "Chest pain, unspecified"),
    "palpitations": ("R00.2", "Palpitations"),
    "cough": ("R05.9", "Cough, unspecified"),
    "shortness of breath": ("R06.02", "Shortness of breath"),
    "fever": ("R50.9", "Fever, unspecified"),
    "night sweats": ("R61", "Generalized hyperhidrosis"),
    "hot flashes": ("R23.2", "Flushing"),
    "edema": ("R60.9", "Edema, unspecified"),
    "itching": ("L29.9", "Pruritus, unspecified"),
    # -------------------------------------------------------------------------
    # 4.6 Gynecological
    # -------------------------------------------------------------------------
    "menstrual cramps": ("N94.6", "Dysmenorrhea, unspecified"),
    "painful periods": ("N94.6", "Dysmenorrhea, unspecified"),
    "irregular periods": ("N92.6", "Irregular menstruation, unspecified"),
    "irregular menstruation": ("N92.6", "Irregular menstruation, unspecified"),
}


# =============================================================================
# STAGE 5: TCM REVIEW OF SYSTEMS
# =============================================================================
# Category → guidance shown to the model. Order is the order the UI lists
# categories in.

TCM_REVIEW_CATEGORIES: Dict[str, str] = {
    "appetite": "Eating habits or changes in appetite: excessive hunger, lack of appetite, cravings.",
    "taste": "Taste abnormalities: bitterness, sweetness, loss of taste.",
    "stool": "Bowel movements: frequency, consistency, color, dryness, looseness, blood.",
    "thirst": "Thirst patterns: excessive thirst, lack of thirst, preference for warm or cold drinks.",
    "urine": "Urination: amount, frequency, difficulty, color, clarity.",
    "sleep": "Sleep quality: insomnia, excessive sleepiness, restless sleep, vivid dreaming.",
    "energy": "Energy level: fatigue, lethargy, hyperactivity, stamina.",
    "temperature": "Temperature sensations: feeling hot, cold, alternating hot and cold.",
    "sweat": "Sweating: night sweats, spontaneous sweating, absence of sweat.",
    "head": "Head symptoms: headache, dizziness, vertigo.",
    "ear": "Ear symptoms: tinnitus, hearing loss, pain, discharge.",
    "eye": "Eye symptoms: blurred vision, dryness, tearing, irritation.",
    "nose": "Nasal symptoms: congestion, discharge, dryness, nosebleeds.",
    "throat": "Throat symptoms: soreness, dryness, difficulty swallowing.",
    "pain": "Pain: location, nature, intensity, timing.",
    "libido": "Sexual drive: low, normal, or high.",
    "pregnancies": "Pregnancy history: live births, miscarriages, abortions.",
    "menstruation": "Menstrual pattern: cycle length, regularity, flow, color, cramps, PMS.",
    "discharge": "Genital discharge: color, thickness, amount, odor.",
}


# =============================================================================
# STAGE 6: CLINICAL NOTE SECTION LABELS
# =============================================================================
# Header lines practitioners commonly type on their own line. Matching is
# case-insensitive and ignores a trailing colon.

SECTION_LABELS: List[str] = [
    "CC",
    "HPI",
    "PMH",
    "FH",
    "SH",
    "ES",
    "Appetite",
    "Taste",
    "Stool",
    "Thirst",
    "Urine",
    "Sleep",
    "Energy",
    "Temp",
    "Sweat",
    "Head",
    "Ear",
    "Eye",
    "Nose",
    "Throat",
    "Pain",
    "Libido",
    "Tongue",
    "Pulse",
    "Diagnosis",
    "Points",
    "Plan",
]
