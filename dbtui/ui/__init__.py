"""Terminal widgets rendered to strings: data table, pickers, filters, overlays and forms."""