from io import BytesIO
from typing import Optional

from reportlab.lib.colors import HexColor
from reportlab.lib.pagesizes import A4
from reportlab.pdfgen import canvas
from reportlab.platypus import Table, TableStyle

from ressarcimento.formatacao import formatar_mes_ano, formatar_moeda, formatar_percentual
from ressarcimento.models import DetalheMensal, ResultadoCalculo


PAGE_W, PAGE_H = A4
VERDE_ESCURO = HexColor("#148c73")
CINZA_CLARO = HexColor("#f0f2f6")
BRANCO = HexColor("#FFFFFF")
PRETO = HexColor("#262730")
MARGEM = 40
LINHAS_POR_PAGINA = 30

ROTULOS_FORNECIMENTO = {
    "monofasico": "Monofásico",
    "bifasico": "Bifásico",
    "trifasico": "Trifásico",
}


def gerar_relatorio(resultado: ResultadoCalculo) -> bytes:
    """Returns PDF bytes for st.download_button.

    Page 1:  Summary (input data, totals, final indemnification)
    Page 2+: Monthly breakdown table
    """
    buf = BytesIO()
    c = canvas.Canvas(buf, pagesize=A4)

    _pagina_resumo(c, resultado)
    c.showPage()

    detalhes = list(resultado.detalhes)
    for i in range(0, len(detalhes), LINHAS_POR_PAGINA):
        ultima = i + LINHAS_POR_PAGINA >= len(detalhes)
        _pagina_tabela(c, detalhes[i:i + LINHAS_POR_PAGINA],
                       resultado if ultima else None)
        c.showPage()

    c.save()
    return buf.getvalue()


def _pagina_resumo(c: canvas.Canvas, resultado: ResultadoCalculo):
    """Page 1: input summary and key figures."""
    # Header bar
    c.setFillColor(VERDE_ESCURO)
    c.rect(0, PAGE_H - 80, PAGE_W, 80, fill=1, stroke=0)

    c.setFillColor(BRANCO)
    c.setFont("Helvetica-Bold", 22)
    c.drawString(MARGEM, PAGE_H - 50, "Relatório de Ressarcimento ICMS")
    c.setFont("Helvetica", 11)
    c.drawString(MARGEM, PAGE_H - 70, "ICMS sobre energia compensada, corrigido pelo IPCA")

    y = PAGE_H - 120
    c.setFillColor(PRETO)
    entrada = resultado.entrada
    if entrada is not None:
        if entrada.nome_cliente:
            c.setFont("Helvetica-Bold", 14)
            c.drawString(MARGEM, y, f"Cliente: {entrada.nome_cliente}")
            y -= 25
        c.setFont("Helvetica", 12)
        linhas = [
            f"Tipo de Fornecimento: {ROTULOS_FORNECIMENTO.get(entrada.tipo_fornecimento, entrada.tipo_fornecimento)}",
            f"Energia Injetada: {entrada.energia_injetada_kwh} kWh",
            f"Consumo: {entrada.consumo_kwh} kWh",
            f"Data de Instalação: {entrada.data_instalacao.strftime('%d/%m/%Y')}",
        ]
        for linha in linhas:
            c.drawString(MARGEM, y, linha)
            y -= 18

    c.setFont("Helvetica", 12)
    c.drawString(MARGEM, y, f"Total de Meses: {resultado.quantidade_meses}")
    y -= 18
    c.drawString(MARGEM, y, f"Valor Base: {formatar_moeda(resultado.valor_base_total)}")
    y -= 18
    c.drawString(MARGEM, y, f"Valor Corrigido: {formatar_moeda(resultado.valor_corrigido_total)}")
    y -= 60

    # Main metric
    c.setFillColor(VERDE_ESCURO)
    c.setFont("Helvetica-Bold", 36)
    c.drawCentredString(PAGE_W / 2, y, formatar_moeda(resultado.indenizacao_final))
    y -= 25
    c.setFont("Helvetica", 14)
    c.drawCentredString(PAGE_W / 2, y, "Indenização Final (valor corrigido em dobro)")

    if resultado.quantidade_meses == 0:
        y -= 40
        c.setFillColor(PRETO)
        c.setFont("Helvetica", 11)
        c.drawCentredString(PAGE_W / 2, y, "Ainda não há meses elegíveis para ressarcimento.")

    _rodape(c)


def _pagina_tabela(c: canvas.Canvas, detalhes: list[DetalheMensal],
                   totais: Optional[ResultadoCalculo]):
    """Monthly breakdown; the totals row goes on the last page only."""
    # Header
    c.setFillColor(VERDE_ESCURO)
    c.rect(0, PAGE_H - 60, PAGE_W, 60, fill=1, stroke=0)
    c.setFillColor(BRANCO)
    c.setFont("Helvetica-Bold", 18)
    c.drawString(MARGEM, PAGE_H - 40, "Detalhamento Mensal")

    headers = ["Mês/Ano", "Consumo (kWh)", "Valor Base", "Taxa IPCA", "Valor Corrigido", "Diferença"]
    data = [headers]

    for d in detalhes:
        data.append([
            formatar_mes_ano(d.mes_ano),
            f"{d.consumo_kwh} kWh",
            formatar_moeda(d.valor_base),
            formatar_percentual(d.taxa_efetiva, casas=4),
            formatar_moeda(d.valor_corrigido),
            formatar_moeda(d.diferenca),
        ])

    if totais is not None:
        data.append([
            "TOTAL",
            "",
            formatar_moeda(totais.valor_base_total),
            "",
            formatar_moeda(totais.valor_corrigido_total),
            formatar_moeda(totais.valor_corrigido_total - totais.valor_base_total),
        ])

    col_widths = [65, 85, 85, 70, 95, 85]
    table = Table(data, colWidths=col_widths)

    estilos = [
        # Header row
        ("BACKGROUND", (0, 0), (-1, 0), VERDE_ESCURO),
        ("TEXTCOLOR", (0, 0), (-1, 0), BRANCO),
        ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
        ("FONTSIZE", (0, 0), (-1, 0), 9),
        ("ALIGN", (0, 0), (-1, 0), "CENTER"),
        # Data rows
        ("FONTNAME", (0, 1), (-1, -1), "Helvetica"),
        ("FONTSIZE", (0, 1), (-1, -1), 8),
        ("ALIGN", (0, 1), (0, -1), "CENTER"),
        ("ALIGN", (1, 1), (-1, -1), "RIGHT"),
        ("ROWBACKGROUNDS", (0, 1), (-1, -1), [BRANCO, CINZA_CLARO]),
        # Grid
        ("GRID", (0, 0), (-1, -1), 0.5, HexColor("#cccccc")),
        ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
        ("TOPPADDING", (0, 0), (-1, -1), 4),
        ("BOTTOMPADDING", (0, 0), (-1, -1), 4),
    ]
    if totais is not None:
        estilos += [
            ("BACKGROUND", (0, -1), (-1, -1), CINZA_CLARO),
            ("FONTNAME", (0, -1), (-1, -1), "Helvetica-Bold"),
        ]
    table.setStyle(TableStyle(estilos))

    table_w, table_h = table.wrap(0, 0)
    x = (PAGE_W - table_w) / 2
    y = PAGE_H - 90 - table_h
    table.drawOn(c, x, y)

    _rodape(c)


def _rodape(c: canvas.Canvas):
    """Draw footer on current page."""
    c.setFillColor(HexColor("#999999"))
    c.setFont("Helvetica", 8)
    c.drawCentredString(PAGE_W / 2, 20,
                        "* Valores estimados, corrigidos pelo IPCA. Documento gerado automaticamente")
