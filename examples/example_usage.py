"""Using the engines directly, without Flask or MySQL.

Controllers and services are thin; the ledger and attendance rules are plain
functions over in-memory records.
"""

from datetime import date

from src.institute_ledger.institute_ledger.attendance.analyzer import analyze_defaulter
from src.institute_ledger.institute_ledger.container import build_schedule
from src.institute_ledger.institute_ledger.fees.admission import admit_payment
from src.institute_ledger.institute_ledger.fees.ledger import compute_ledger, suggest_late_fee
from src.institute_ledger.institute_ledger.fees.receipt import build_receipt
from src.institute_ledger.institute_ledger.students.model import Student


def main():
    student = Student(
        student_id=1,
        first_name="Asha",
        last_name="Patil",
        course_name="MS-CIT",
        admission_date=date(2026, 1, 20),
    )
    payments = [{"amount": 1000, "payment_date": "2026-02-01", "payment_method": "UPI"}]

    ledger = compute_ledger(student, build_schedule(), payments, today=date(2026, 4, 15))
    print(ledger.to_dict())
    print("suggested late fee:", suggest_late_fee(ledger.balance))

    event = admit_payment(
        {
            "amount": "1000",
            "late_fee": "100",
            "payment_date": "2026-04-15",
            "payment_method": "CASH",
            "denominations": [{"value": 500, "count": 2}, {"value": 100, "count": 1}],
        },
        ledger,
    )
    receipt = build_receipt(student, event)
    print(receipt.total, receipt.amount_in_words, receipt.file_name)

    marks = [
        {"student_id": 1, "date": "2025-01-03", "status": "PRESENT"},
        {"student_id": 1, "date": "2025-01-04", "status": "ABSENT"},
        {"student_id": 1, "date": "2025-01-05", "status": "ABSENT"},
        {"student_id": 1, "date": "2025-01-06", "status": "ABSENT"},
    ]
    print(analyze_defaulter(student, marks, 3))


if __name__ == "__main__":
    main()
