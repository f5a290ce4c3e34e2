"""Built-in contract templates used when no client template is available."""

from contract_processor.models.document import DocumentType

CONTRATO_BASE = """# CONTRATO DE PRESTACIÓN DE SERVICIOS PARA EVENTOS

**Fecha:** {{FECHA_FIRMA}}

## DATOS DEL CONTRATANTE
- **Nombre Completo:** {{NOMBRE_CLIENTE}}
- **RFC:** {{RFC}}

## DESCRIPCIÓN DEL EVENTO
- **Nombre del Evento:** {{NOMBRE_EVENTO}}
- **Fecha del Evento:** {{FECHA_EVENTO}}
- **Ubicación:** {{UBICACION}}
- **Tipo de Paquete:** {{PAQUETE}}

## TÉRMINOS ECONÓMICOS
- **Precio Total:** {{PRECIO}}
- **Anticipo:** {{ANTICIPO}}

## SERVICIOS INCLUIDOS
El paquete {{PAQUETE}} incluye los servicios acordados según la cotización proporcionada.

### RESPONSABILIDADES DEL PRESTADOR DE SERVICIOS
1. Coordinar todos los aspectos del evento según lo acordado
2. Proveer los servicios especificados en el paquete seleccionado
3. Cumplir con los horarios y fechas establecidas

### RESPONSABILIDADES DEL CONTRATANTE
1. Realizar los pagos según los términos establecidos
2. Proveer la información necesaria para la organización del evento
3. Colaborar en la coordinación y planificación

## TÉRMINOS DE PAGO
- **Anticipo:** Se requiere el 50% al momento de firmar el contrato
- **Saldo:** El saldo restante debe liquidarse 7 días antes del evento

## FIRMA DEL CONTRATO
**CONTRATANTE:**
Nombre: {{NOMBRE_CLIENTE}}
Firma: _____________________
Fecha: {{FECHA_FIRMA}}

**PRESTADOR DE SERVICIOS:**
Firma: _____________________
Fecha: {{FECHA_FIRMA}}

---
*Este contrato fue generado automáticamente por el sistema de procesamiento de contratos.*"""

ANEXO_A = """# ANEXO A - ESPECIFICACIONES TÉCNICAS DEL EVENTO

**Cliente:** {{NOMBRE_CLIENTE}}
**Evento:** {{NOMBRE_EVENTO}}
**Fecha:** {{FECHA_EVENTO}}

## ESPECIFICACIONES TÉCNICAS
- **Sonido:** {{ESPECIFICACIONES_SONIDO}}
- **Iluminación:** {{ESPECIFICACIONES_LUZ}}
- **Decoración:** {{ESPECIFICACIONES_DECORACION}}

## CRONOGRAMA DETALLADO
- **Montaje:** {{HORARIO_MONTAJE}}
- **Inicio Evento:** {{HORARIO_INICIO}}
- **Fin Evento:** {{HORARIO_FIN}}
- **Desmontaje:** {{HORARIO_DESMONTAJE}}

---
*Anexo A - Especificaciones Técnicas*"""

ANEXO_B = """# ANEXO B - TÉRMINOS Y CONDICIONES ADICIONALES

**Cliente:** {{NOMBRE_CLIENTE}}
**Evento:** {{NOMBRE_EVENTO}}

## CONDICIONES ESPECIALES
- **Política de Cancelación:** {{POLITICA_CANCELACION}}
- **Seguros:** {{COBERTURA_SEGUROS}}
- **Fuerza Mayor:** {{CLAUSULA_FUERZA_MAYOR}}

## RESPONSABILIDADES ADICIONALES
- **Cliente:** {{RESPONSABILIDADES_CLIENTE}}
- **Proveedor:** {{RESPONSABILIDADES_PROVEEDOR}}

---
*Anexo B - Términos y Condiciones*"""

ANEXO_C = """# ANEXO C - MENÚ Y SERVICIOS DE CATERING

**Cliente:** {{NOMBRE_CLIENTE}}
**Evento:** {{NOMBRE_EVENTO}}
**Invitados:** {{NUMERO_INVITADOS}}

## MENÚ SELECCIONADO
- **Entrada:** {{MENU_ENTRADA}}
- **Plato Principal:** {{MENU_PRINCIPAL}}
- **Postre:** {{MENU_POSTRE}}
- **Bebidas:** {{MENU_BEBIDAS}}

## SERVICIOS ADICIONALES
- **Meseros:** {{NUMERO_MESEROS}}
- **Barman:** {{SERVICIO_BAR}}
- **Montaje:** {{TIPO_MONTAJE}}

---
*Anexo C - Servicios de Catering*"""

ANEXO_D = """# ANEXO D - FACTURACIÓN Y PAGOS

**Cliente:** {{NOMBRE_CLIENTE}}
**RFC:** {{RFC}}

## DETALLE DE COSTOS
- **Servicio Base:** ${{COSTO_BASE}}
- **Servicios Adicionales:** ${{COSTOS_ADICIONALES}}
- **Total:** ${{TOTAL}}

## FORMA DE PAGO
- **Anticipo (50%):** ${{ANTICIPO}}
- **Saldo:** ${{SALDO}}
- **Método de Pago:** {{METODO_PAGO}}

## DATOS DE FACTURACIÓN
- **Razón Social:** {{RAZON_SOCIAL}}
- **RFC:** {{RFC}}
- **Dirección:** {{DIRECCION_FISCAL}}

---
*Anexo D - Facturación y Pagos*"""


DEFAULT_TEMPLATES: dict[DocumentType, str] = {
    DocumentType.CONTRATO_BASE: CONTRATO_BASE,
    DocumentType.ANEXO_A: ANEXO_A,
    DocumentType.ANEXO_B: ANEXO_B,
    DocumentType.ANEXO_C: ANEXO_C,
    DocumentType.ANEXO_D: ANEXO_D,
}


def get_default_template(document_type: DocumentType | str) -> str:
    """Look up the built-in template; unknown types get the base contract."""
    parsed = (
        document_type
        if isinstance(document_type, DocumentType)
        else DocumentType.parse(document_type)
    )
    if parsed is None:
        return DEFAULT_TEMPLATES[DocumentType.CONTRATO_BASE]
    return DEFAULT_TEMPLATES[parsed]
