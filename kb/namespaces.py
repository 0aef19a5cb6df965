"""Namespaces and predicate URIs used in the JSON-LD payloads."""

# --- Service vocabularies ---
NS_ARTICLES = "https://trapeze-project.eu/ns/articles#"
NS_DEFINITIONS = "https://trapeze-project.eu/ns/definitions#"
NS_DPA = "https://trapeze-project.eu/ns/dpa#"
NS_GDPR = "https://trapeze-project.eu/ns/gdpr#"

# --- Data Privacy Vocabulary ---
DPV = "https://w3id.org/dpv#"
DPV_CONCEPT = DPV + "Concept"
DPV_ISSUBTYPEOF = DPV + "isSubTypeOf"

# --- Shared predicates ---
DC_CREATED = "http://purl.org/dc/terms/created"
DC_CREATOR = "http://purl.org/dc/terms/creator"
DC_SOURCE = "http://purl.org/dc/terms/source"
RDF_ISDEFINEDBY = "http://www.w3.org/2000/01/rdf-schema#isDefinedBy"
SCHEMA_DATE = "http://www.w3.org/2001/XMLSchema#date"
SKOS_CONCEPT = "http://www.w3.org/2004/02/skos/core#Concept"
SKOS_DEFINITION = "http://www.w3.org/2004/02/skos/core#definition"
SKOS_INSCHEME = "http://www.w3.org/2004/02/skos/core#inScheme"
SKOS_NOTE = "http://www.w3.org/2004/02/skos/core#note"
SKOS_PREFLABEL = "http://www.w3.org/2004/02/skos/core#prefLabel"
SKOS_RELATED = "http://www.w3.org/2004/02/skos/core#related"
SW_TERMSTATUS = "http://www.w3.org/2003/06/sw-vocab-status/ns#term_status"
