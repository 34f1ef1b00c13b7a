"""
Sports Event Catalog Constants

Campus sports offered, where they are played, and academic profile options.
"""

ALL_SPORTS = [
    "Basketball",
    "Soccer",
    "Volleyball",
    "Tennis",
    "Swimming",
    "Badminton",
    "Ping Pong",
    "Running",
]

# Sport filter value that matches every event
ALL_SPORTS_FILTER = "All"

CAMPUS_LOCATIONS = {
    "Basketball": [
        "MAC Basketball Court 1",
        "MAC Basketball Court 2",
        "MAC Basketball Court 3",
        "MAC Basketball Court 4",
    ],
    "Soccer": [
        "MAC Soccer Field A",
        "MAC Soccer Field B",
        "Maverick Stadium Field",
    ],
    "Volleyball": [
        "MAC Volleyball Court 1",
        "MAC Volleyball Court 2",
    ],
    "Tennis": [
        "MAC Tennis Court 1",
        "MAC Tennis Court 2",
        "MAC Tennis Court 3",
    ],
    "Swimming": [
        "MAC Swimming Pool",
    ],
    "Badminton": [
        "MAC Badminton Court 1",
        "MAC Badminton Court 2",
    ],
    "Ping Pong": [
        "MAC Recreation Room - Table 1",
        "MAC Recreation Room - Table 2",
    ],
    "Running": [
        "MAC Indoor Track",
        "Campus Loop Trail",
        "Maverick Stadium Track",
    ],
}

ACADEMIC_YEARS = ["Freshman", "Sophomore", "Junior", "Senior", "Graduate"]

MAJORS = [
    "Computer Science",
    "Engineering",
    "Business",
    "Biology",
    "Psychology",
    "Mathematics",
    "Physics",
    "Chemistry",
    "English",
    "History",
    "Art",
    "Music",
    "Architecture",
    "Nursing",
    "Education",
    "Criminal Justice",
    "Social Work",
    "Other",
]

SKILL_LEVELS = ["Beginner", "Intermediate", "Advanced"]


def locations_for(sport: str) -> list:
    """Known venues for a sport (empty for unknown sports)"""
    return list(CAMPUS_LOCATIONS.get(sport, []))
