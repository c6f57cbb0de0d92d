BADGE_DATA = [
    # Hydration
    {"id": "hydration_hero", "name": "Hydration Hero", "description": "Drink your daily water goal for 7 days straight", "icon": "💧", "category": "hydration", "criteria": {"kind": "streak", "target": 7, "metric": "water_goal"}},
    # Consistency
    {"id": "meal_planner", "name": "Meal Planner", "description": "Log all meals for 5 consecutive days", "icon": "📋", "category": "consistency", "criteria": {"kind": "streak", "target": 5, "metric": "complete_logging"}},
    {"id": "streak_master", "name": "Streak Master", "description": "Log meals for 30 consecutive days", "icon": "🔥", "category": "consistency", "criteria": {"kind": "streak", "target": 30, "metric": "daily_logging"}},
    {"id": "early_bird", "name": "Early Bird", "description": "Log breakfast before 9 AM for 7 days", "icon": "🌅", "category": "consistency", "criteria": {"kind": "streak", "target": 7, "metric": "early_breakfast"}},
    # Nutrition
    {"id": "protein_power", "name": "Protein Power", "description": "Meet your protein goals for 10 days", "icon": "💪", "category": "nutrition", "criteria": {"kind": "total", "target": 10, "metric": "protein_goal"}},
    {"id": "calorie_conscious", "name": "Calorie Conscious", "description": "Stay within 100 calories of your target for 7 days", "icon": "🎯", "category": "nutrition", "criteria": {"kind": "streak", "target": 7, "metric": "calorie_accuracy"}},
    {"id": "veggie_lover", "name": "Veggie Lover", "description": "Log vegetables in 15 different meals", "icon": "🥗", "category": "nutrition", "criteria": {"kind": "total", "target": 15, "metric": "vegetable_meals"}},
    {"id": "balanced_diet", "name": "Balanced Diet", "description": "Hit all macro targets in a single day", "icon": "⚖️", "category": "nutrition", "criteria": {"kind": "achievement", "target": 1, "metric": "macro_balance"}},
    # Goals
    {"id": "recipe_explorer", "name": "Recipe Explorer", "description": "Try 10 different AI-generated recipes", "icon": "👨‍🍳", "category": "goals", "criteria": {"kind": "total", "target": 10, "metric": "recipes_tried"}},
    {"id": "goal_crusher", "name": "Goal Crusher", "description": "Achieve your weekly nutrition goal", "icon": "🏆", "category": "goals", "criteria": {"kind": "achievement", "target": 1, "metric": "weekly_goal"}},
]
