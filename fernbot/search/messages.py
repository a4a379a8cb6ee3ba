# Reusable reply fragments shown to end users.
# Internal error details never go into these strings.

NO_DATA = (
    "ขออภัยครับ ยังไม่มีข้อมูลในระบบ\n"
    "กรุณาเพิ่มข้อมูลในฐานข้อมูลก่อนนะครับ"
)

NOT_UNDERSTOOD = (
    "ขออภัยครับ ไม่เข้าใจคำถามนี้ 😅\n"
    'ลองถามด้วยคำง่ายๆ เช่น "ชอบอะไร" หรือ "กินอะไร"'
)

SUGGESTIONS_HEADER = "หรือหมายถึงคำถามเหล่านี้ครับ:"

NO_ANSWER = "เจอคำถามนี้แล้วครับ แต่ยังไม่มีคำตอบในระบบ 🙏"

NO_ANSWER_FOR_PERSONA = "ยังไม่มีข้อมูลของ{missing}สำหรับคำถามนี้ครับ แต่คำตอบที่ใกล้เคียงที่สุดจาก{other}คือ:\n{answer}"

STORE_ERROR = (
    "ขออภัยครับ ระบบขัดข้องชั่วคราว\n"
    "กรุณาลองใหม่อีกครั้งในภายหลังนะครับ"
)


def attributed(name: str, answer: str) -> str:
    return f"{name}: {answer}"


def build_not_understood(suggested: list) -> str:
    if not suggested:
        return NOT_UNDERSTOOD
    lines = "\n".join(f"- {q}" for q in suggested)
    return f"{NOT_UNDERSTOOD}\n\n{SUGGESTIONS_HEADER}\n{lines}"
