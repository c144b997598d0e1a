from ifexpr.macro import If

scores = {"ada": 97, "brook": 84, "cyd": 71, "dee": 42}

for name, score in scores.items():
    grade = (
        If(score >= 90).then("A")
        .else_if(score >= 80).then("B")
        .else_if(score >= 70).then("C")
        .else_("F")
        .end()
    )
    print(f"{name:<6} {score:>3}  {grade}")
