"""
Fixed Hebrew text blocks inserted into the client confirmation.

Each block starts and ends with a newline; the template places them
between other lines without adding separators of its own.
"""

from models.booking import ExtraOption

DOLPHIN_YACHT = "דולפין"
TYPHOON_YACHT = "טייפון"
KING_YACHT = "קינג"
BBQ_YACHTS = frozenset({TYPHOON_YACHT, KING_YACHT})

# Exact duration (hours) of the cruise that includes a free grill
BBQ_DURATION_HOURS = 3

PRICE_INCLUDES_DOLPHIN = """
מחיר הזמנה כולל:
* קישוט היאכטה עם
* שלט "מזל טוב"
* מערכת מוזיקה מוגברת
* עם מיקרופון (רק לדיבור)
* שלושה אנשי צוות המלווים אתכם ונותנים שירות.
* מזרן ים גדול.
* גלגלי הצלה וחגורות ציפה לירידה למים.
"""

PRICE_INCLUDES_TYPHOON_KING = """
מחיר ההזמנה כולל:
* בלונים בתוך היאכטה.
* שלט "מזל טוב".
"""

PRICE_INCLUDES_DEFAULT = """
מחיר ההזמנה כולל:
* בקבוק שמפניה
* בלונים בתוך היאכטה.
* שלט "מזל טוב".
* מים
"""

BBQ_INSTRUCTIONS = """
אפשרות לעשות על האש (גריל) ושירות גרילמן ללא תוספת תשלום - רק בהזמנה של 3 שעות .

*הנחיות*
 וציוד נדרש (במידה ועושים "על האש")
במידה והנכם מעוניינים להשתמש במנגל, יש להצטייד מראש ב:
  2-3 שקיות פחמים ומדליק פחמים.
 מפה חד-פעמית, כלים חד-פעמיים, קערות ומגשים.
 מומלץ מאוד להביא בשר ומוצרים נלווים כשהם כבר מופשרים ומוכנים לצלייה.
"""

FISHING_CLIENT_DESCRIPTION = (
    "דייג, עד 8 דייגים,כולל חכות , פטיונות, רישיון דייג ליום אחד. "
    "נבקש למסור לנו מס'תעודת זהות, שם ושם משפחה של כל אדם שרוצה להחזיק חקה. "
    "לצורך פתיחת רישיון דייג ליום אחד , במשרד חקלאות."
)

NO_EXTRAS_LINE = "* ללא תוספות מיוחדות. \n"
EXTRAS_HEADER = "תוספות נבחרות:\n"

# Long descriptions replacing the short extra name in the client letter
CLIENT_EXTRA_DESCRIPTIONS = {
    ExtraOption.FISHING: FISHING_CLIENT_DESCRIPTION,
}
