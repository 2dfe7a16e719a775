"""
Sample input for complexityscanner.

    complexityscanner analyze examples/inventory.py --format table
"""


def restock(items, minimum):
    """for +1, nested if +2, and +1, nested if +3: total 7"""
    orders = []
    for item in items:
        if item.active and item.count < minimum:
            if item.supplier:
                orders.append(item)
    return orders


def classify(count):
    """if +1, elif +1, else +1: total 3"""
    if count == 0:
        return "empty"
    elif count < 10:
        return "low"
    else:
        return "ok"


def load(path):
    """try is free, except +1, nested if +2; parse is scored on its own"""
    def parse(line):
        return line.split(",") if line else []

    try:
        with open(path) as f:
            return [parse(line) for line in f]
    except OSError:
        if path.endswith(".bak"):
            return []
        raise
