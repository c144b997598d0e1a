from ifexpr.macro import If

audit_log = []


def record(event):
    audit_log.append(event)
    return event


def withdraw(balance, amount):
    return (
        If(amount <= balance)
        .then(balance - amount)
        .then_do(record(f"withdrew {amount}"))
        .else_(balance)
        .else_do(record(f"refused {amount}"))
        .end()
    )


balance = 100
for amount in (30, 90, 50):
    balance = withdraw(balance, amount)

print(f"balance: {balance}")
print("\n".join(audit_log))
