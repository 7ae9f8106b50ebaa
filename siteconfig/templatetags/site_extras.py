from django import template

register = template.Library()


@register.filter
def rupiah(amount):
    """``150000`` -> ``Rp 150.000``"""
    try:
        value = int(amount or 0)
    except (TypeError, ValueError):
        return amount
    return 'Rp ' + f'{value:,}'.replace(',', '.')
