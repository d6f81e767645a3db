plan_prompt = '''## [Task]
You are an elite strength coach. Create a 1-week workout plan.

## [User Context]
- Goal: {goal}
- Level: {experience}
- Schedule: {days} days ({split} split)
- Session Duration: {duration} minutes
- Equipment: {equipment}

## STRICT RULES (HARD CONSTRAINTS)
1. Structure: Generate exactly {days} days.
2. Day Names: Use exactly: {day_names_json}, in this order.
3. Volume: {min_ex}-{max_ex} exercises per day.
4. Database: You must ONLY select exercises from the list below. Do not invent names.
- If a rule is violated, the output is INVALID.

## ALLOWED EXERCISES
# Each item = - name (muscle)
{catalog_list}

## Output
OUTPUT JSON ONLY (this exact format, there could be more exercises, adjust reps, sets and rest as needed):
{example_json}
'''

EXAMPLE_EXERCISES = [
    {"name": "Exact Name From List", "sets": 3, "reps": "5", "rest": "120s"},
    {"name": "Exact Name From List", "sets": 3, "reps": "8", "rest": "90s"},
    {"name": "Exact Name From List", "sets": 3, "reps": "12", "rest": "90s"},
]
