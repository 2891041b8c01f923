from typing import Dict, List


# Misspelled search words typed against real software names, keyed by length.
SOFTWARE_NAMES = {
    3: "Git",
    5: "nginx",
    8: "PostgreSQL",
    10: "TensorFlow",
    15: "Apache Cassandra",
    20: "Microsoft Power BI",
    30: "Amazon Elastic MapReduce (EMR)",
    40: "Google Cloud Machine Learning Engine for",
    50: "IBM Cloud Pak Data and Oracle Cloud Infrastructure",
}

SEARCH_WORDS = {
    3: "igt",
    5: "ngobx",
    8: "PosrgerSqO",
    10: "TebsprFlow",
    15: "Apacbe Caeeendwa",
    20: "Mivrosovt Power NI",
    30: "AmazobnErastic MopReduce (ENR)",
    40: "Gooele Cloud Macbnie Learning Ebgine foe",
    50: "IBM Crod Park Dete and Orakle Croud Infravtructara",
}


def case_name(length: int) -> str:
    """Benchmark case name with a zero-padded length so names sort naturally."""
    return f"jaro_winkler_distance_{length:02d}"


def default_cases() -> List[Dict[str, str]]:
    """Return the built-in benchmark cases, shortest first."""
    return [
        {
            'name': case_name(length),
            'query': SEARCH_WORDS[length],
            'target': SOFTWARE_NAMES[length],
        }
        for length in sorted(SOFTWARE_NAMES)
    ]
