# missions/definitions.py

# версия каталога: пишется в каждый аудит-ивент
CATALOG_VERSION = "2025.1"

MISSIONS = {

# ==================================================
# 🧥 CORE: гардероб и замеры
# ==================================================

"ROZRUCH_7_7": {
    "category": "core",
    "difficulty": "medium",
    "repeatable": False,
    "cooldown_days": 0,
    "season": None,
    "triggers": ["ITEM_CREATED"],
    "rewards": {"xp": 100, "badges": ["ROZGRZANY"]},
    "title": "Kick-off 7/7",
    "summary": "Add at least one new item every day for seven days to build the habit.",
    "requirements": "1 item a day for 7 days in a row, each with >=3 key fields or 1 critical field.",
    "repeatability": "Once per account.",
},

"SIX_PILLARS": {
    "category": "core",
    "difficulty": "hard",
    "repeatable": True,
    "cooldown_days": 90,
    "season": None,
    "triggers": ["ITEM_CREATED"],
    "rewards": {"xp": 150, "unlocks": ["theme_unlock"]},
    "title": "Six Pillars",
    "summary": "Log at least one item in each of the six wardrobe pillars.",
    "requirements": "1 entry in each of the 6 categories.",
    "repeatability": "Every 90 days.",
},

"CLOSET_100": {
    "category": "core",
    "difficulty": "hard",
    "repeatable": True,
    "cooldown_days": 365,
    "season": None,
    "triggers": ["ITEM_CREATED", "PROFILE_UPDATED"],
    "rewards": {"xp": 200, "premium_days": 7},
    "title": "Closet 100%",
    "summary": "Complete every garment type you marked as “I wear”.",
    "requirements": "Fill all active “I wear” types.",
    "repeatability": "Once a year.",
},

"GOLDEN_WAIST": {
    "category": "core",
    "difficulty": "medium",
    "repeatable": True,
    "cooldown_days": 90,
    "season": None,
    "triggers": ["ITEM_CREATED", "ITEM_UPDATED"],
    "rewards": {"xp": 75, "badges": ["TAILORED_FRAME"]},
    "title": "Golden Waistline",
    "summary": "Record the waist measurement for every bottoms type.",
    "requirements": "Waist for all bottoms types.",
    "repeatability": "Quarterly.",
},

"CHEST_MASTER": {
    "category": "core",
    "difficulty": "medium",
    "repeatable": True,
    "cooldown_days": 90,
    "season": None,
    "triggers": ["ITEM_CREATED", "ITEM_UPDATED"],
    "rewards": {"xp": 75},
    "title": "Chest Master",
    "summary": "Log chest measurements for five distinct tops subtypes.",
    "requirements": "Chest in >=5 different tops subtypes.",
    "repeatability": "Quarterly.",
},

"RING_SNIPER": {
    "category": "core",
    "difficulty": "easy",
    "repeatable": True,
    "cooldown_days": 180,
    "season": None,
    "triggers": ["ITEM_CREATED", "ITEM_UPDATED"],
    "rewards": {"xp": 60, "badges": ["RING_STICKER"]},
    "title": "Ring Precision",
    "summary": "Store the ring size for three different fingers.",
    "requirements": "Ring size for 3 fingers.",
    "repeatability": "Every 180 days.",
},

"WRIST_PRO": {
    "category": "core",
    "difficulty": "easy",
    "repeatable": True,
    "cooldown_days": 90,
    "season": None,
    "triggers": ["ITEM_CREATED", "ITEM_UPDATED"],
    "rewards": {"xp": 70},
    "title": "Wrist Pro",
    "summary": "Measure wrist circumference plus a watch or bracelet spec.",
    "requirements": "Wrist circumference + 1 watch or bracelet.",
    "repeatability": "Quarterly.",
},

"SUIT_UP": {
    "category": "core",
    "difficulty": "hard",
    "repeatable": True,
    "cooldown_days": 365,
    "season": None,
    "triggers": ["ITEM_CREATED", "ITEM_UPDATED"],
    "rewards": {"xp": 120, "unlocks": ["sets_feature"]},
    "title": "Suit Up!",
    "summary": "Record the full suit measurements to unlock outfit sets.",
    "requirements": "Full suit measurements.",
    "repeatability": "Once a year.",
},

"TRACKSUIT_DUO": {
    "category": "core",
    "difficulty": "easy",
    "repeatable": True,
    "cooldown_days": 180,
    "season": None,
    "triggers": ["ITEM_CREATED"],
    "rewards": {"xp": 60},
    "title": "Tracksuit Duo",
    "summary": "Capture a tracksuit as a linked set.",
    "requirements": "Top + bottom linked as one set.",
    "repeatability": "Every 180 days.",
},

"PAJAMA_PRIME": {
    "category": "core",
    "difficulty": "easy",
    "repeatable": True,
    "cooldown_days": 180,
    "season": None,
    "triggers": ["ITEM_CREATED"],
    "rewards": {"xp": 50},
    "title": "Pajama Prime",
    "summary": "Log a complete pajama set with all key attributes.",
    "requirements": "Complete pajama set.",
    "repeatability": "Every 180 days.",
},

"QUICK_SIZE": {
    "category": "core",
    "difficulty": "medium",
    "repeatable": True,
    "cooldown_days": 14,
    "season": None,
    "triggers": ["ITEM_UPDATED", "MEASUREMENT_UPDATED"],
    "rewards": {"xp": 40},
    "title": "Quick Size",
    "summary": "Fill five missing fields within five minutes.",
    "requirements": "5 missing fields in 5 minutes.",
    "repeatability": "Every 14 days.",
},

"BRA_MATTERS": {
    "category": "core",
    "difficulty": "medium",
    "repeatable": True,
    "cooldown_days": 180,
    "season": None,
    "triggers": ["ITEM_CREATED"],
    "rewards": {"xp": 80},
    "title": "Cup Matters",
    "summary": "Record underbust, cup and preferred cut for your bras.",
    "requirements": "Underbust + cup + cut preference.",
    "repeatability": "Every 180 days.",
},

"WISHLIST_PRO": {
    "category": "core",
    "difficulty": "medium",
    "repeatable": True,
    "cooldown_days": 90,
    "season": None,
    "triggers": ["WISHLIST_ITEM_CREATED"],
    "rewards": {"xp": 70, "extras": ["shareable_card"]},
    "title": "Giftlist Pro",
    "summary": "Add five wishlist items linked with size data.",
    "requirements": "5 wishlist items with a matched size.",
    "repeatability": "Quarterly.",
},

"SECRET_HELPER": {
    "category": "core",
    "difficulty": "medium",
    "repeatable": True,
    "cooldown_days": 60,
    "season": None,
    "triggers": ["PROFILE_SHARED"],
    "rewards": {"xp": 100},
    "title": "Secret Helper",
    "summary": "Share your size profile with a trusted contact.",
    "requirements": "Share the profile with 1 unique recipient.",
    "repeatability": "Every 60 days.",
},

"JEWEL_MAP": {
    "category": "core",
    "difficulty": "easy",
    "repeatable": True,
    "cooldown_days": 90,
    "season": None,
    "triggers": ["ITEM_CREATED"],
    "rewards": {"xp": 60},
    "title": "Millimeter Map",
    "summary": "Log three jewellery items with exact mm/cm values.",
    "requirements": "3 jewellery items with exact sizes.",
    "repeatability": "Quarterly.",
},

"HAT_MEASURE": {
    "category": "core",
    "difficulty": "easy",
    "repeatable": True,
    "cooldown_days": 365,
    "season": None,
    "triggers": ["ITEM_CREATED", "MEASUREMENT_UPDATED"],
    "rewards": {"xp": 50},
    "title": "Hat Measure",
    "summary": "Measure your head and add one beanie plus one hat.",
    "requirements": "Head circumference + 1 beanie + 1 hat.",
    "repeatability": "Once a year.",
},

"GLOVE_STANDARD": {
    "category": "core",
    "difficulty": "easy",
    "repeatable": True,
    "cooldown_days": 365,
    "season": None,
    "triggers": ["ITEM_CREATED"],
    "rewards": {"xp": 50},
    "title": "Glove Standard",
    "summary": "Log hand circumference and glove size.",
    "requirements": "Hand circumference + glove size.",
    "repeatability": "Once a year.",
},

"BELT_PERFECT": {
    "category": "core",
    "difficulty": "easy",
    "repeatable": True,
    "cooldown_days": 180,
    "season": None,
    "triggers": ["ITEM_CREATED"],
    "rewards": {"xp": 40},
    "title": "Perfect Belt",
    "summary": "Capture belt size and hole distance.",
    "requirements": "Belt size + hole distance.",
    "repeatability": "Every 180 days.",
},

"FIT_PHOTO": {
    "category": "core",
    "difficulty": "medium",
    "repeatable": True,
    "cooldown_days": 90,
    "season": None,
    "triggers": ["PHOTO_ADDED"],
    "rewards": {"xp": 80},
    "title": "Fit Photo",
    "summary": "Upload three reference photos for different items.",
    "requirements": "3 photos for 3 different items.",
    "repeatability": "Quarterly.",
},

"ACCURACY_PLUS_MINUS_ONE": {
    "category": "core",
    "difficulty": "medium",
    "repeatable": True,
    "cooldown_days": 30,
    "season": None,
    "triggers": ["PURCHASE_LOGGED"],
    "rewards": {"xp": 70, "extras": ["fit_accuracy"]},
    "title": "Accuracy +/-1",
    "summary": "Log purchase feedback to fine tune your fit accuracy.",
    "requirements": "3 purchase comparisons with feedback.",
    "repeatability": "Monthly.",
},

"SIZE_ON_THE_WAY": {
    "category": "core",
    "difficulty": "medium",
    "repeatable": True,
    "cooldown_days": 60,
    "season": None,
    "triggers": ["ITEM_CREATED", "ITEM_UPDATED"],
    "rewards": {"xp": 90},
    "title": "Size on the Way",
    "summary": "Complete ten system-suggested fields after logging 20 items.",
    "requirements": "10 suggested fields after 20 items.",
    "repeatability": "Every 60 days.",
},

"CLOSET_SCANNER": {
    "category": "core",
    "difficulty": "hard",
    "repeatable": True,
    "cooldown_days": 90,
    "season": None,
    "triggers": ["ITEM_CREATED", "ITEM_UPDATED"],
    "rewards": {"xp": 100},
    "title": "Closet Scanner",
    "summary": "Rapid log ten items and fill missing details within 72h.",
    "requirements": "10 quick items completed within 72h.",
    "repeatability": "Quarterly.",
},

# ==================================================
# 🍂 SEASONAL: окно по месяцам, год может переходить
# ==================================================

"STEP_INTO_BOOTS": {
    "category": "seasonal",
    "difficulty": "medium",
    "repeatable": True,
    "cooldown_days": 365,
    "season": {"start_month": 11, "end_month": 2},
    "triggers": ["ITEM_CREATED", "ITEM_UPDATED"],
    "rewards": {"xp": 80},
    "title": "Step into Boots",
    "summary": "Capture size, insole and calf circumference for your boots.",
    "requirements": "Boot size + insole + calf circumference.",
    "repeatability": "Once per season.",
},

"BIKINI_BALANCE": {
    "category": "seasonal",
    "difficulty": "medium",
    "repeatable": True,
    "cooldown_days": 365,
    "season": {"start_month": 4, "end_month": 8},
    "triggers": ["ITEM_CREATED"],
    "rewards": {"xp": 80, "extras": ["summer_card"]},
    "title": "Bikini Balance",
    "summary": "Log top & bottom sizes plus cut preference.",
    "requirements": "Top + bottom size + cut preference.",
    "repeatability": "Once per season.",
},

"SPRING_REFRESH": {
    "category": "seasonal",
    "difficulty": "medium",
    "repeatable": True,
    "cooldown_days": 365,
    "season": {"start_month": 3, "end_month": 4},
    "triggers": ["ITEM_UPDATED"],
    "rewards": {"xp": 90, "badges": ["SPRING_BADGE"]},
    "title": "Spring Refresh",
    "summary": "Update ten existing items during March or April.",
    "requirements": "10 updated items in March-April.",
    "repeatability": "Once per season.",
},

"FALL_FIT": {
    "category": "seasonal",
    "difficulty": "medium",
    "repeatable": True,
    "cooldown_days": 365,
    "season": {"start_month": 8, "end_month": 11},
    "triggers": ["ITEM_CREATED"],
    "rewards": {"xp": 90},
    "title": "Autumn Fit",
    "summary": "Log two outerwear pieces with full measurements before November.",
    "requirements": "2 outerwear items with full measurements.",
    "repeatability": "Once per season.",
},

# ==================================================
# 🤝 REFERRAL / TEAM
# ==================================================

"INVITE_AND_MEASURE": {
    "category": "referral",
    "difficulty": "hard",
    "repeatable": True,
    "cooldown_days": 0,
    "season": None,
    "triggers": ["INVITE_SENT", "INVITE_ACCEPTED", "INVITED_USER_PROGRESS"],
    "rewards": {"xp": 150, "extras": ["invitee_xp:50"]},
    "title": "Invite & Measure",
    "summary": "Invite someone who logs ten items within 14 days.",
    "requirements": "Invitee: 10 entries in 14 days.",
    "repeatability": "Up to 5 times a year.",
},

"SIZE_AMBASSADOR": {
    "category": "referral",
    "difficulty": "hard",
    "repeatable": True,
    "cooldown_days": 90,
    "season": None,
    "triggers": ["INVITE_SENT", "INVITE_ACCEPTED", "INVITED_USER_PROGRESS"],
    "rewards": {"xp": 300, "premium_days": 30},
    "title": "Size Ambassador",
    "summary": "Invite three friends in a week; each must add ten items.",
    "requirements": "3 invitees in 7 days, 10 entries each.",
    "repeatability": "Quarterly.",
},

"TEAM_SIZES": {
    "category": "team",
    "difficulty": "hard",
    "repeatable": True,
    "cooldown_days": 90,
    "season": None,
    "triggers": ["CIRCLE_PROGRESS"],
    "rewards": {"xp": 200, "badges": ["TEAM_BADGE"]},
    "title": "Size Squad",
    "summary": "As a circle, fill 100 fields in seven days.",
    "requirements": "Circle of <=5 fills 100 fields in 7 days, >=10 each.",
    "repeatability": "Quarterly.",
},

# ==================================================
# 🔥 STREAK
# ==================================================

"STREAK_RESCUER": {
    "category": "streak",
    "difficulty": "medium",
    "repeatable": True,
    "cooldown_days": 30,
    "season": None,
    "triggers": ["STREAK_UPDATED"],
    "rewards": {"xp": 0, "freeze_tokens": 1},
    "title": "Streak Saver",
    "summary": "Keep a 14-day streak to earn a Freeze token.",
    "requirements": "14-day activity streak.",
    "repeatability": "Once a month.",
},

}
