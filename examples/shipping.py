from ifexpr.macro import If

FREE_SHIPPING_OVER = 50.0


def shipping_cost(subtotal, express=False):
    return If(express).then(15.0).else_(
        If(subtotal >= FREE_SHIPPING_OVER).then(0.0).else_(4.99).end()
    ).end()


for subtotal, express in [(20.0, False), (75.0, False), (75.0, True)]:
    cost = shipping_cost(subtotal, express)
    label = If(cost == 0).then("free").else_(f"${cost:.2f}").end()
    print(f"subtotal ${subtotal:.2f} express={express}: {label}")
